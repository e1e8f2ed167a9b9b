"""Category management API."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from catso.database import get_db
from catso.models import Category, User
from catso.routes.auth import require_admin
from catso.services.categories import (
    get_category_by_name,
    list_categories,
    slugify_category,
)

router = APIRouter(prefix="/api/categories", tags=["categories"])


class CategoryCreate(BaseModel):
    name: str | None = None
    title: str | None = None
    description: str | None = None
    order: int = 0


class CategoryUpdate(BaseModel):
    name: str | None = None
    title: str | None = None
    description: str | None = None
    order: int | None = None


def _serialize(category: Category) -> dict[str, object]:
    return {
        "id": category.id,
        "name": category.name,
        "title": category.title,
        "description": category.description,
        "order": category.order,
    }


async def _ensure_unique_slug(
    db: AsyncSession, slug: str, *, exclude_id: int | None = None
) -> None:
    existing = await get_category_by_name(db, slug)
    if existing is not None and existing.id != exclude_id:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Category already exists",
        )


@router.get("")
async def get_categories(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    categories = await list_categories(db)
    return JSONResponse([_serialize(category) for category in categories])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> JSONResponse:
    """Create a category; the slug comes from ``name`` or else ``title``."""
    source = (payload.name or payload.title or "").strip()
    if not source:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name or title is required",
        )

    slug = slugify_category(source)
    await _ensure_unique_slug(db, slug)

    category = Category(
        name=slug,
        title=(payload.title or "").strip() or None,
        description=payload.description,
        order=payload.order,
    )
    db.add(category)
    await db.commit()
    await db.refresh(category)

    return JSONResponse(_serialize(category), status_code=status.HTTP_201_CREATED)


@router.patch("/{category_id}")
async def update_category(
    category_id: int,
    payload: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> JSONResponse:
    category = await db.get(Category, category_id)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Category not found"
        )

    if payload.name is not None:
        slug = slugify_category(payload.name)
        if not slug:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Name cannot be empty",
            )
        await _ensure_unique_slug(db, slug, exclude_id=category.id)
        category.name = slug
    if payload.title is not None:
        category.title = payload.title.strip() or None
    if payload.description is not None:
        category.description = payload.description
    if payload.order is not None:
        category.order = payload.order

    await db.commit()
    await db.refresh(category)
    return JSONResponse(_serialize(category))


@router.delete("/{category_id}", response_class=Response)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> Response:
    category = await db.get(Category, category_id)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Category not found"
        )

    await db.delete(category)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

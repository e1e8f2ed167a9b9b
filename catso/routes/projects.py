"""Project management API."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catso.database import get_db
from catso.models import Project, User
from catso.routes.auth import get_current_user, require_admin
from catso.services.projects import (
    delete_project_media,
    list_projects,
    next_project_order,
    serialize_project,
)

router = APIRouter(prefix="/api/projects", tags=["projects"])


class ProjectCreate(BaseModel):
    title: str
    category: str
    description: str | None = None
    image_url: str | None = None
    video_url: str | None = None
    client_name: str | None = None
    published: bool = True


class ProjectUpdate(BaseModel):
    title: str | None = None
    category: str | None = None
    description: str | None = None
    image_url: str | None = None
    video_url: str | None = None
    client_name: str | None = None
    published: bool | None = None
    order: int | None = None


class BulkDeleteRequest(BaseModel):
    ids: list[int] = Field(default_factory=list)


class ReorderItem(BaseModel):
    id: int
    order: int
    category: str | None = None


class ReorderRequest(BaseModel):
    items: list[ReorderItem] = Field(default_factory=list)


async def _get_project_or_404(db: AsyncSession, project_id: int) -> Project:
    project = await db.get(Project, project_id)
    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Project not found"
        )
    return project


@router.get("")
async def get_projects(
    db: AsyncSession = Depends(get_db),
    current_user: User | None = Depends(get_current_user),
) -> JSONResponse:
    """List projects; unpublished ones are only visible to admins."""
    is_admin = bool(current_user and current_user.is_admin)
    projects = await list_projects(db, include_unpublished=is_admin)
    return JSONResponse([serialize_project(project) for project in projects])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: ProjectCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> JSONResponse:
    """Create a project at the end of the gallery."""
    title = payload.title.strip()
    category = payload.category.strip()
    if not title or not category:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Title and category are required",
        )

    project = Project(
        title=title,
        category=category,
        description=payload.description,
        image_url=payload.image_url,
        video_url=payload.video_url,
        client_name=payload.client_name,
        published=payload.published,
        order=await next_project_order(db),
        author_id=current_user.id,
    )
    db.add(project)
    await db.commit()
    await db.refresh(project)

    return JSONResponse(
        serialize_project(project), status_code=status.HTTP_201_CREATED
    )


@router.post("/bulk-delete")
async def bulk_delete_projects(
    payload: BulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> dict[str, object]:
    """Delete several projects at once; unknown ids are ignored."""
    if not payload.ids:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No project ids given"
        )

    result = await db.execute(select(Project).where(Project.id.in_(payload.ids)))
    projects = result.scalars().all()
    for project in projects:
        delete_project_media(project)
        await db.delete(project)
    await db.commit()

    return {"success": True, "deleted_count": len(projects)}


@router.put("/reorder")
async def reorder_projects(
    payload: ReorderRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> dict[str, object]:
    """Apply new positions (and optionally categories) in one transaction."""
    ids = [item.id for item in payload.items]
    result = await db.execute(select(Project).where(Project.id.in_(ids)))
    projects = {project.id: project for project in result.scalars().all()}

    missing = sorted(set(ids) - projects.keys())
    if missing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown project id(s): {', '.join(map(str, missing))}",
        )

    for item in payload.items:
        project = projects[item.id]
        project.order = item.order
        if item.category:
            project.category = item.category
    await db.commit()

    return {"success": True, "updated_count": len(payload.items)}


@router.patch("/{project_id}")
async def update_project(
    project_id: int,
    payload: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> JSONResponse:
    """Update the given fields of a project."""
    project = await _get_project_or_404(db, project_id)

    for field, value in payload.model_dump(exclude_unset=True).items():
        if field in {"title", "category"}:
            if value is None or not str(value).strip():
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"{field.capitalize()} cannot be empty",
                )
            value = str(value).strip()
        if field in {"published", "order"} and value is None:
            continue
        setattr(project, field, value)

    await db.commit()
    await db.refresh(project)
    return JSONResponse(serialize_project(project))


@router.delete("/{project_id}", response_class=Response)
async def delete_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> Response:
    """Delete a project and its uploaded media."""
    project = await _get_project_or_404(db, project_id)

    delete_project_media(project)
    await db.delete(project)
    await db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)

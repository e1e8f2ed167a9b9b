"""Admin dashboard, Behance import and uploads."""

import logging

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    Request,
    UploadFile,
    status,
)
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from catso.behance import (
    BehanceSyncError,
    NoProjectsFoundError,
    ProfileUnavailableError,
    SyncInProgressError,
    sync_profile,
)
from catso.config import config
from catso.database import get_db
from catso.main import render_template
from catso.models import User
from catso.routes.auth import require_admin
from catso.services.categories import list_categories
from catso.services.projects import list_projects, serialize_project
from catso.utils.files import save_upload

logger = logging.getLogger("catso.admin")

router = APIRouter(tags=["admin"])

_SYNC_ERROR_STATUS: tuple[tuple[type[BehanceSyncError], int], ...] = (
    (SyncInProgressError, status.HTTP_409_CONFLICT),
    (NoProjectsFoundError, status.HTTP_404_NOT_FOUND),
    (ProfileUnavailableError, status.HTTP_502_BAD_GATEWAY),
)


def _sync_error_status(exc: BehanceSyncError) -> int:
    for error_type, status_code in _SYNC_ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.get("/admin", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> HTMLResponse:
    """Project list with the project form, sync, reorder and delete controls."""
    projects = await list_projects(db, include_unpublished=True)
    categories = await list_categories(db)
    return render_template(
        "admin/dashboard.html",
        request,
        {
            "current_user": current_user,
            "projects": projects,
            "project_data": {
                project.id: serialize_project(project) for project in projects
            },
            "categories": categories,
            "behance_profile_url": config.BEHANCE_PROFILE_URL,
        },
    )


@router.get("/admin/categories", response_class=HTMLResponse)
async def categories_page(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> HTMLResponse:
    categories = await list_categories(db)
    return render_template(
        "admin/categories.html",
        request,
        {"current_user": current_user, "categories": categories},
    )


@router.post("/api/admin/behance/sync")
async def behance_sync(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> JSONResponse:
    """Import new projects from the configured Behance profile."""
    logger.info(
        "Behance sync requested by %s for %s",
        current_user.email,
        config.BEHANCE_PROFILE_URL,
    )
    try:
        result = await sync_profile(
            db, config.BEHANCE_PROFILE_URL, author_id=current_user.id
        )
    except BehanceSyncError as exc:
        status_code = _sync_error_status(exc)
        logger.warning("Behance sync failed (%s): %s", status_code, exc)
        return JSONResponse({"error": str(exc)}, status_code=status_code)
    except Exception as exc:
        logger.exception("Behance sync crashed")
        return JSONResponse(
            {"error": f"Internal error: {exc}"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return JSONResponse(
        {
            "success": True,
            "message": result.message,
            "count": result.imported_count,
            "imported": result.imported_titles,
            "skipped": result.skipped_titles,
            "strategy": result.strategy,
        }
    )


@router.post("/api/upload")
async def upload_file(
    file: UploadFile | None = File(None),
    current_user: User = Depends(require_admin),
) -> JSONResponse:
    """Store an uploaded image or video and return its public URL."""
    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded"
        )

    url = await save_upload(file)
    logger.info("Stored upload %s for %s", url, current_user.email)
    return JSONResponse({"url": url})

"""Public site pages."""

from xml.sax.saxutils import escape

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from catso.config import config
from catso.database import get_db
from catso.main import render_template
from catso.models import Project, User
from catso.routes.auth import get_current_user
from catso.services.categories import group_projects, list_categories
from catso.services.projects import list_projects
from catso.utils.video import describe_video

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User | None = Depends(get_current_user),
) -> HTMLResponse:
    """Gallery of published projects, one section per category."""
    categories = await list_categories(db)
    projects = await list_projects(db)
    return render_template(
        "index.html",
        request,
        {
            "current_user": current_user,
            "sections": group_projects(categories, projects),
        },
    )


@router.get("/project/{project_id}", response_class=HTMLResponse)
async def project_detail(
    request: Request,
    project_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User | None = Depends(get_current_user),
) -> HTMLResponse:
    project = await db.get(Project, project_id)
    is_admin = bool(current_user and current_user.is_admin)
    if project is None or (not project.published and not is_admin):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Project not found"
        )

    extra_embeds = [
        embed
        for embed in (describe_video(url) for url in project.extra_video_list())
        if embed is not None
    ]
    return render_template(
        "project.html",
        request,
        {
            "current_user": current_user,
            "project": project,
            "embed": describe_video(project.video_url),
            "extra_embeds": extra_embeds,
            "images": project.image_list(),
        },
    )


@router.get("/sitemap.xml")
async def sitemap(db: AsyncSession = Depends(get_db)) -> Response:
    """Site root plus every published project."""
    base = config.SITE_URL.rstrip("/")
    entries = [f"  <url><loc>{escape(base)}/</loc><priority>1.0</priority></url>"]
    for project in await list_projects(db):
        lastmod = ""
        if project.updated_at is not None:
            lastmod = f"<lastmod>{project.updated_at.date().isoformat()}</lastmod>"
        entries.append(
            f"  <url><loc>{escape(base)}/project/{project.id}</loc>"
            f"{lastmod}<priority>0.8</priority></url>"
        )

    body = "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
            *entries,
            "</urlset>",
            "",
        ]
    )
    return Response(content=body, media_type="application/xml")

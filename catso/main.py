"""Main FastAPI application."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from catso.config import config
from catso.database import init_db
from catso.logging_config import configure_logging
from catso.utils.auth import ensure_initial_admin
from catso.utils.files import thumbnail_for
from catso.utils.video import youtube_thumbnail


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan manager."""
    await init_db()
    await ensure_initial_admin()
    yield


configure_logging(debug=config.DEBUG)
config.ensure_media_dirs()


app = FastAPI(
    title="Catso",
    description="Portfolio site for a video production studio",
    version="0.1.0",
    lifespan=lifespan,
)

# Mount static files
static_path = Path(__file__).parent / "static"
static_path.mkdir(exist_ok=True)
app.mount("/static", StaticFiles(directory=str(static_path)), name="static")

# Mount media files
app.mount("/media", StaticFiles(directory=str(config.MEDIA_ROOT)), name="media")

# Setup templates
templates_path = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_path))
templates.env.globals["youtube_thumbnail"] = youtube_thumbnail
templates.env.globals["thumbnail_for"] = thumbnail_for


access_logger = logging.getLogger("catso.access")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests similar to the access log."""

    response = await call_next(request)
    client_host = "-"
    if request.client is not None:
        client_host = request.client.host or "-"

    access_logger.info(
        '%s - "%s %s" %s',
        client_host,
        request.method,
        request.url.path,
        response.status_code,
    )
    return response


def render_template(
    template_name: str, request: Request, context: dict | None = None
) -> HTMLResponse:
    """Render a template with the common site context.

    Args:
        template_name: Name of the template file
        request: FastAPI request object
        context: Additional context variables

    Returns:
        HTMLResponse with rendered template
    """
    if context is None:
        context = {}

    context.setdefault("current_user", None)
    context.setdefault("site_url", config.SITE_URL.rstrip("/"))
    context.setdefault("placeholder_image", config.PLACEHOLDER_IMAGE_URL)

    return templates.TemplateResponse(request, template_name, context)


# Health check endpoint
@app.get("/healthz")
async def healthz() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


# Import routes
from catso.routes import admin, auth, categories, pages, projects  # noqa: E402

app.include_router(auth.router)
app.include_router(projects.router)
app.include_router(categories.router)
app.include_router(admin.router)
app.include_router(pages.router)


# Login page
@app.get("/login", response_class=HTMLResponse)
async def login_page(request: Request) -> HTMLResponse:
    """Show login page."""
    return render_template(
        "auth/login.html",
        request,
        {"signup_enabled": config.FEATURE_SIGNUP_ENABLED},
    )


import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from strategia.api.deps import extract_session_token
from strategia.api.v1.router import api_router
from strategia.core.config import settings
from strategia.core.logging_config import setup_logging
from strategia.database import Base, SessionLocal, engine
from strategia.services.container import build_services
from strategia.templates.api import ApiResponseTemplate

setup_logging()
logger = logging.getLogger(__name__)

# Crear tablas
Base.metadata.create_all(bind=engine)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates" / "web"))

API = settings.API_V1_STR
PUBLIC_PATHS = {
    settings.AUTH_ROUTE,
    "/health",
    "/docs",
    "/redoc",
    f"{API}/openapi.json",
    "/favicon.ico",
    f"{API}/auth/sign-up",
    f"{API}/auth/sign-in",
    f"{API}/auth/sign-out",
    f"{API}/auth/session",
    f"{API}/notifications/session",
}
PUBLIC_PREFIXES = ("/docs/", f"{API}/auth/oauth/")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s %s", settings.PROJECT_NAME, settings.VERSION)
    await run_in_threadpool(app.state.services.auth_service.restore_sessions)
    yield
    app.state.services.shutdown()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{API}/openapi.json",
    lifespan=lifespan,
)
app.state.services = build_services(SessionLocal)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def custom_http_exception_handler(request: Request, exc: StarletteHTTPException):
    if request.url.path.startswith("/api/"):
        return JSONResponse(
            ApiResponseTemplate.error(exc.detail),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)


@app.middleware("http")
async def enforce_session(request: Request, call_next):
    path = request.url.path
    if request.method == "OPTIONS":
        return await call_next(request)

    services = request.app.state.services
    token = extract_session_token(request)
    pending_redirect = services.navigator.consume(token) if token else None
    if path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES):
        return await call_next(request)
    state = await run_in_threadpool(services.auth_service.get_session, token)

    if state is None or pending_redirect:
        redirect_to = pending_redirect or settings.AUTH_ROUTE
        if path.startswith("/api/"):
            return JSONResponse(
                ApiResponseTemplate.error("Not authenticated", redirect=redirect_to),
                status_code=401,
            )
        return RedirectResponse(redirect_to, status_code=303)

    request.state.auth = state
    return await call_next(request)


# Incluir rutas
app.include_router(api_router, prefix=API)


@app.get(settings.AUTH_ROUTE, response_class=HTMLResponse)
async def auth_page(request: Request):
    return templates.TemplateResponse(
        request,
        "auth.html",
        {"title": settings.PROJECT_NAME, "api": API, "home": settings.HOME_ROUTE},
    )


@app.get(settings.HOME_ROUTE, response_class=HTMLResponse)
async def home_page(request: Request):
    state = request.state.auth
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "title": settings.PROJECT_NAME,
            "api": API,
            "auth_route": settings.AUTH_ROUTE,
            "full_name": state.full_name or state.email,
            "strategic_lines": settings.STRATEGIC_LINES,
        },
    )


@app.get("/health")
async def health():
    return {"status": "ok", "service": settings.PROJECT_NAME, "version": settings.VERSION}

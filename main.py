import time
import uuid
from typing import Any, Mapping, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from errors import StoryNotFoundError, StoryValidationError
from logging_setup import setup_logging
from schemas import Category, Envelope, HealthInfo, Status, StoryCriteria, StoryPayload
from seed import demo_stories
from service import StoryService
from settings import AppSettings, load_settings
from store import StoryStore

router = APIRouter()

# -------------------- Helpers --------------------

SECURITY_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
}


def respond(status_code: int = 200, headers: Optional[Mapping[str, str]] = None, **fields: Any) -> JSONResponse:
    body = Envelope[Any](success=status_code < 400, **fields)
    return JSONResponse(status_code=status_code, content=body.to_json(), headers=headers)


def server_error(exc: Exception, settings: AppSettings) -> JSONResponse:
    error = str(exc) if settings.is_development else "Internal server error"
    return respond(500, message="Something went wrong!", error=error)


def get_service(request: Request) -> StoryService:
    return request.app.state.story_service

# -------------------- Health & metadata --------------------

@router.get("/health")
def health():
    return respond(message="Story App API is running", data=HealthInfo())


@router.get("/categories")
def list_categories():
    return respond(data=[c.value for c in Category])


@router.get("/statuses")
def list_statuses():
    return respond(data=[s.value for s in Status])

# -------------------- Stories --------------------

@router.get("/stories")
def list_stories(
    search: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
    service: StoryService = Depends(get_service),
):
    result = service.list(StoryCriteria(search=search, category=category, status=status))
    return respond(data=result.stories, total=result.total)


@router.get("/stories/{story_id}")
def get_story(story_id: str, service: StoryService = Depends(get_service)):
    return respond(data=service.get(story_id))


@router.post("/stories")
def create_story(
    payload: Optional[StoryPayload] = None,
    service: StoryService = Depends(get_service),
):
    story = service.create(payload or StoryPayload())
    return respond(201, data=story, message="Story created successfully")


@router.put("/stories/{story_id}")
def update_story(
    story_id: str,
    payload: Optional[StoryPayload] = None,
    service: StoryService = Depends(get_service),
):
    story = service.update(story_id, payload or StoryPayload())
    return respond(data=story, message="Story updated successfully")


@router.delete("/stories/{story_id}")
def delete_story(story_id: str, service: StoryService = Depends(get_service)):
    story = service.delete(story_id)
    return respond(data=story, message="Story deleted successfully")

# -------------------- Error handling --------------------

def _install_error_handlers(app: FastAPI, settings: AppSettings) -> None:
    @app.exception_handler(StoryNotFoundError)
    async def story_not_found(request: Request, exc: StoryNotFoundError):
        logger.warning("Story {} not found ({} {})", exc.story_id, request.method, request.url.path)
        return respond(404, message=str(exc))

    @app.exception_handler(StoryValidationError)
    async def story_invalid(request: Request, exc: StoryValidationError):
        logger.warning("Rejected story payload: {}", exc.invalid.reason.value)
        return respond(400, message=str(exc))

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
        )
        return respond(400, message="Invalid request body", error=details)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return respond(404, message="Route not found")
        return respond(exc.status_code, headers=exc.headers, message=str(exc.detail))

    # Errors raised by middleware itself; route errors are caught in access_log
    @app.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception):
        logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
        return server_error(exc, settings)

# -------------------- App --------------------

def create_app(settings: Optional[AppSettings] = None, store: Optional[StoryStore] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    if store is None:
        store = StoryStore(demo_stories() if settings.seed_demo_data else None)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.story_service = StoryService(store)

    # Middleware added last runs first: security headers, then CORS, then access_log.
    @app.middleware("http")
    async def access_log(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        started = time.perf_counter()
        with logger.contextualize(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
                response = server_error(exc, settings)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info("{} {} -> {} ({:.1f} ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        response.headers["X-Request-ID"] = request_id
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    _install_error_handlers(app, settings)
    app.include_router(router, prefix=settings.api_prefix)

    logger.info("{} ready with {} stories ({})", settings.app_name, len(store), settings.environment)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)

"""
plann.er FastAPI service -- trip creation, confirmation, itinerary by day.

Entrypoint: uvicorn services.planner.main:app --host 0.0.0.0 --port 3333
        or: planner-api  (reads PORT from settings)
"""

import logging
import uuid
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from sqlalchemy.ext.asyncio import async_sessionmaker
from starlette.responses import JSONResponse

from services.planner.config import Settings, get_settings
from services.planner.errors import ErrorCode, PlannerError
from services.planner.middleware.cors import setup_cors
from services.planner.middleware.sentry import setup_sentry
from services.planner.notifications.formatting import LongDateFormatter
from services.planner.notifications.mailer import Mailer
from services.planner.routers import health, participants, trips

logger = logging.getLogger(__name__)


def _envelope_error(request: Request, status_code: int, error: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "requestId": getattr(request.state, "request_id", str(uuid.uuid4())),
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_sentry(settings)

    from services.planner.db.engine import create_engine as create_sa_engine

    sa_engine = create_sa_engine(settings)
    app.state.db_engine = sa_engine
    # expire_on_commit=False: NullPool returns connection after commit,
    # lazy load on closed connection would fail without this.
    app.state.db_session_factory = async_sessionmaker(sa_engine, expire_on_commit=False)

    mail_client = httpx.AsyncClient(timeout=settings.mail_timeout_s)
    app.state.mailer = Mailer(settings, client=mail_client)
    if app.state.mailer.sandbox:
        logger.warning("RESEND_API_KEY not set, mail runs in sandbox mode")

    logger.info("planner_api_started environment=%s", settings.environment)

    yield

    await app.state.mailer.aclose()
    await sa_engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="plann.er API",
        version=settings.app_version,
        docs_url="/docs" if settings.environment == "development" else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.date_formatter = LongDateFormatter(settings.itinerary_timezone)

    app.include_router(health.router)
    app.include_router(trips.router)
    app.include_router(participants.router)

    # CORS (needs to be outermost to handle preflight)
    setup_cors(app, settings)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    # -- Exception Handlers --

    @app.exception_handler(PlannerError)
    async def planner_error_handler(request: Request, exc: PlannerError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("request_failed path=%s code=%s", request.url.path, exc.code.value)
        return _envelope_error(request, exc.status_code, exc.to_error())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
        return _envelope_error(
            request,
            422,
            {
                "code": ErrorCode.VALIDATION_ERROR.value,
                "message": "Invalid input.",
                "fields": fields,
            },
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc) -> JSONResponse:
        return _envelope_error(
            request, 404, {"code": ErrorCode.NOT_FOUND.value, "message": "Resource not found."}
        )

    @app.exception_handler(422)
    async def validation_error_handler(request: Request, exc) -> JSONResponse:
        return _envelope_error(
            request,
            422,
            {
                "code": ErrorCode.VALIDATION_ERROR.value,
                "message": str(exc.detail) if hasattr(exc, "detail") else "Validation error.",
            },
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc) -> JSONResponse:
        return _envelope_error(
            request,
            500,
            {"code": ErrorCode.INTERNAL_ERROR.value, "message": "An unexpected error occurred."},
        )

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.port)

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.routers import health as health_router
from app.api.routers import uploads as uploads_router
from app.core.config import Settings, get_settings
from app.db.session import dispose_engine, get_session_factory
from app.schemas import ErrorResponse
from app.services.ban_registry import BanRegistry
from app.services.storage import SigningError, UploadSigner
from app.services.uploads import UploadAuthorizationService

logger = logging.getLogger(__name__)


def build_upload_service(settings: Settings) -> UploadAuthorizationService:
    registry = BanRegistry(settings, get_session_factory(settings))
    signer = UploadSigner(settings)
    return UploadAuthorizationService(registry, signer)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    service = build_upload_service(settings)
    try:
        await service.signer.prepare()
    except SigningError:
        logger.exception("Object storage client could not be created; uploads will fail")
    app.state.upload_service = service
    logger.info("Upload service ready (env=%s, bucket=%s)", settings.env, settings.bucket_name)
    yield
    await dispose_engine()


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    body = ErrorResponse(error="Invalid request", errors=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    app = FastAPI(
        debug=settings.debug,
        title="Upload Gate API",
        docs_url="/",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(uploads_router.router)
    app.include_router(health_router.router)

    return app


app = create_app()

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.deps import get_upload_service
from app.schemas import ErrorResponse, UploadRequest, UploadResponse
from app.services.ban_registry import RegistryUnavailableError
from app.services.storage import SigningError
from app.services.uploads import UploadAuthorizationService, UploadDeniedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])


def _error(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
    },
    summary="Generate a pre-signed URL for uploading a file",
)
async def create_upload_url(
    payload: UploadRequest,
    service: UploadAuthorizationService = Depends(get_upload_service),
):
    try:
        grant = await service.authorize(payload)
    except UploadDeniedError as exc:
        return _error(status.HTTP_403_FORBIDDEN, exc.message)
    except RegistryUnavailableError:
        logger.exception("Ban registry unavailable; refusing upload")
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Upload service temporarily unavailable.")
    except SigningError:
        logger.exception("Failed to sign upload URL")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Could not create upload URL.")
    return UploadResponse(result=grant)

from app.schemas.common import HealthResponse, HealthStatus
from app.schemas.upload import (
    MAX_UPLOAD_SIZE,
    ErrorResponse,
    UploadGrant,
    UploadRequest,
    UploadResponse,
)

__all__ = [
    "MAX_UPLOAD_SIZE",
    "UploadRequest",
    "UploadGrant",
    "UploadResponse",
    "ErrorResponse",
    "HealthStatus",
    "HealthResponse",
]

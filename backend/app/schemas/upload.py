from typing import Annotated, Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

MAX_UPLOAD_SIZE: Final[int] = 1024 * 1024

AllowedContentType = Literal["image/jpeg", "image/png", "image/gif"]

# Hyphenated 8-4-4-4-12 form only; kept as sent so object keys carry the caller's casing.
UUIDString = Annotated[
    str,
    StringConstraints(
        pattern=r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
    ),
]


class UploadRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Original file name")
    content_type: AllowedContentType = Field(..., alias="type")
    size: int = Field(..., strict=True, ge=1, le=MAX_UPLOAD_SIZE, description="File size in bytes")
    author_uuid: UUIDString = Field(..., alias="authorUUID")
    module_uuid: UUIDString = Field(..., alias="moduleUUID")


class UploadGrant(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    upload_url: str = Field(..., alias="uploadUrl")
    object_key: str = Field(..., alias="objectKey")


class UploadResponse(BaseModel):
    success: Literal[True] = True
    result: UploadGrant


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
    errors: list[dict[str, Any]] | None = None

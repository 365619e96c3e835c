import logging
from uuid import UUID, uuid4

from app.schemas import UploadGrant, UploadRequest
from app.services.ban_registry import BanRegistry
from app.services.storage import UploadSigner

logger = logging.getLogger(__name__)

UPLOAD_DENIED_MESSAGE = "Upload denied: Author or Module is restricted."


class UploadDeniedError(Exception):
    """Raised when the author or the module is on the ban list."""

    def __init__(self, message: str = UPLOAD_DENIED_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


def generate_object_key(module_id: UUID | str, filename: str) -> str:
    return f"{module_id}/{uuid4()}-{filename}"


class UploadAuthorizationService:
    """Turns a validated upload request into a pre-signed PUT grant.

    The ban check always resolves before anything is signed; registry and
    signing errors propagate to the caller untouched.
    """

    def __init__(self, registry: BanRegistry, signer: UploadSigner) -> None:
        self.registry = registry
        self.signer = signer

    async def authorize(self, payload: UploadRequest) -> UploadGrant:
        if await self.registry.check_restricted(payload.author_uuid, payload.module_uuid):
            logger.info(
                "Upload denied for author %s, module %s",
                payload.author_uuid,
                payload.module_uuid,
            )
            raise UploadDeniedError()

        object_key = generate_object_key(payload.module_uuid, payload.name)
        metadata = {
            "uploader": payload.author_uuid,
            "module": payload.module_uuid,
        }
        upload_url = self.signer.issue_upload_grant(
            object_key,
            payload.content_type,
            payload.size,
            metadata,
        )
        logger.info("Issued upload grant for %s (%d bytes)", object_key, payload.size)
        return UploadGrant(upload_url=upload_url, object_key=object_key)

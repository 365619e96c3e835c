import re
from uuid import UUID

import pytest

from app.schemas import UploadRequest
from app.services.ban_registry import RegistryUnavailableError
from app.services.storage import SigningError
from app.services.uploads import UploadDeniedError, generate_object_key
from conftest import AUTHOR_UUID, MODULE_UUID


@pytest.fixture
def upload_request(upload_payload) -> UploadRequest:
    return UploadRequest.model_validate(upload_payload)


def test_generate_object_key():
    key = generate_object_key(UUID(MODULE_UUID), "cat.gif")
    prefix, rest = key.split("/", 1)
    assert prefix == MODULE_UUID
    assert re.fullmatch(r"[0-9a-f-]{36}-cat\.gif", rest)
    assert UUID(rest[:36]).version == 4


def test_upload_request_uses_wire_names(upload_request):
    assert upload_request.content_type == "image/png"
    assert upload_request.author_uuid == AUTHOR_UUID
    assert upload_request.module_uuid == MODULE_UUID


@pytest.mark.asyncio
async def test_authorize_returns_grant(upload_service, upload_request, events):
    grant = await upload_service.authorize(upload_request)

    assert grant.object_key.startswith(f"{MODULE_UUID}/")
    assert grant.upload_url.endswith(grant.object_key)
    assert events == ["ban_check", "sign"]


@pytest.mark.asyncio
async def test_authorize_denied(upload_service, upload_request, registry, signer):
    registry.restricted = True

    with pytest.raises(UploadDeniedError) as exc_info:
        await upload_service.authorize(upload_request)

    assert exc_info.value.message == "Upload denied: Author or Module is restricted."
    assert signer.calls == []


@pytest.mark.asyncio
async def test_registry_errors_propagate(upload_service, upload_request, registry, signer):
    registry.error = RegistryUnavailableError("down")

    with pytest.raises(RegistryUnavailableError):
        await upload_service.authorize(upload_request)
    assert signer.calls == []


@pytest.mark.asyncio
async def test_signing_errors_propagate(upload_service, upload_request, signer):
    signer.error = SigningError("no credentials")

    with pytest.raises(SigningError):
        await upload_service.authorize(upload_request)

import asyncio
from collections.abc import Mapping
from typing import Any, Final

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import UPLOAD_URL_TTL_SECONDS, Settings


class SigningError(Exception):
    """Raised when an upload URL cannot be signed."""


class SigningConfigurationError(SigningError):
    """Raised when storage credentials, endpoint or bucket are missing."""


class UploadSigner:
    """Issues pre-signed single PUT URLs against an S3-compatible bucket (R2)."""

    region: Final[str] = "auto"

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.bucket = settings.bucket_name
        self._client: Any = None

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = self._build_client()
        return self._client

    def missing_settings(self) -> list[str]:
        return [
            name
            for name, value in (
                ("R2_ACCOUNT_ID or S3_ENDPOINT_URL", self.settings.storage_endpoint),
                ("R2_ACCESS_KEY_ID", self.settings.r2_access_key_id),
                ("R2_SECRET_ACCESS_KEY", self.settings.r2_secret_access_key),
                ("BUCKET_NAME", self.bucket),
            )
            if not value
        ]

    async def prepare(self) -> None:
        """Build the SDK client off the event loop when storage is configured."""
        if self._client is None and not self.missing_settings():
            await asyncio.to_thread(lambda: self.client)

    def _build_client(self) -> Any:
        missing = self.missing_settings()
        if missing:
            raise SigningConfigurationError(
                f"Object storage is not configured: missing {', '.join(missing)}"
            )

        try:
            session = boto3.session.Session()
            return session.client(
                "s3",
                endpoint_url=self.settings.storage_endpoint,
                aws_access_key_id=self.settings.r2_access_key_id,
                aws_secret_access_key=self.settings.r2_secret_access_key,
                region_name=self.region,
                config=Config(signature_version="s3v4"),
            )
        except ValueError as exc:
            # botocore rejects malformed endpoint URLs with ValueError
            raise SigningConfigurationError(str(exc)) from exc
        except BotoCoreError as exc:
            raise SigningError("Could not create object storage client") from exc

    def issue_upload_grant(
        self,
        object_key: str,
        content_type: str,
        content_length: int,
        metadata: Mapping[str, str],
    ) -> str:
        if not object_key:
            raise ValueError("object_key must not be empty")

        client = self.client
        try:
            return client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": self.bucket,
                    "Key": object_key,
                    "ContentType": content_type,
                    "ContentLength": content_length,
                    "Metadata": dict(metadata),
                },
                ExpiresIn=UPLOAD_URL_TTL_SECONDS,
            )
        except (BotoCoreError, ClientError) as exc:
            raise SigningError(f"Could not sign upload URL for {object_key}") from exc

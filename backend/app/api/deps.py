from fastapi import Request

from app.services.ban_registry import BanRegistry
from app.services.uploads import UploadAuthorizationService


def get_upload_service(request: Request) -> UploadAuthorizationService:
    return request.app.state.upload_service


def get_ban_registry(request: Request) -> BanRegistry:
    return request.app.state.upload_service.registry

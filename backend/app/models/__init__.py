from app.models.module import RestrictedModule
from app.models.user import RestrictedUser

__all__ = [
    "RestrictedUser",
    "RestrictedModule",
]

from domains.identity.infrastructure.models.user import User

__all__ = ["User"]

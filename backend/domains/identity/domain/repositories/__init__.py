from domains.identity.domain.repositories.user_repository import UserRepository

__all__ = ["UserRepository"]

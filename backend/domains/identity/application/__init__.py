"""Identity Domain - Application Layer"""

from domains.identity.application.user_secret_manager import UserSecretManager

__all__ = ["UserSecretManager"]

"""Identity Domain - Domain Services"""

from domains.identity.domain.services.password_service import PasswordService
from domains.identity.domain.services.secret_cipher import SecretCipher
from domains.identity.domain.services.token_service import TokenPayload, TokenService

__all__ = ["PasswordService", "SecretCipher", "TokenPayload", "TokenService"]

from .password_service import PasswordServiceProtocol
from .session_repository import SessionRepositoryProtocol
from .token_service import TokenServiceProtocol
from .user_repository import UserRepositoryProtocol

__all__ = [
    "PasswordServiceProtocol",
    "SessionRepositoryProtocol",
    "TokenServiceProtocol",
    "UserRepositoryProtocol",
]

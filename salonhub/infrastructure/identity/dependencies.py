"""FastAPI dependencies for identity and authentication."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from salonhub.core import container
from salonhub.database import DatabaseSession
from salonhub.domain.identity.entities.user import User
from salonhub.domain.identity.exceptions import InvalidCredentialsError
from salonhub.exceptions import CredentialsException
from salonhub.infrastructure.identity.services.token_service import TokenClaims, verify_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


async def get_access_claims(token: Annotated[str, Depends(oauth2_scheme)]) -> TokenClaims:
    """Decode the bearer token or reject the request."""
    claims = verify_access_token(token)
    if claims is None:
        raise CredentialsException
    return claims


async def get_current_user(
    claims: Annotated[TokenClaims, Depends(get_access_claims)], db: DatabaseSession
) -> User:
    """
    Get the current authenticated user from the access token.

    The session named in the token must still be valid, so a logged out
    session stops authenticating immediately.

    Raises:
        CredentialsException: If the session ended or the user cannot log in
    """
    container.db.override(db)
    try:
        use_case = container.authentication_use_case()
        return use_case.get_authenticated_user(claims.user_id, claims.session_id)
    except InvalidCredentialsError:
        raise CredentialsException from None
    finally:
        container.db.reset_override()


CurrentUser = Annotated[User, Depends(get_current_user)]

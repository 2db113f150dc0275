import hmac
import logging
from typing import Iterable, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class TokenAuthorizer:
    """Allow/deny decision for write requests based on a static token list."""

    def __init__(self, tokens: Iterable[str]):
        self._tokens = tuple(tokens)

    def is_allowed(self, token: Optional[str]) -> bool:
        if not token:
            return False
        return any(hmac.compare_digest(token, candidate) for candidate in self._tokens)


def get_authorizer(request: Request) -> TokenAuthorizer:
    return TokenAuthorizer(request.app.state.config.api_tokens)


def require_authorization(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    authorizer: TokenAuthorizer = Depends(get_authorizer)
) -> None:
    token = credentials.credentials if credentials else None
    if not authorizer.is_allowed(token):
        logger.warning("Rejected unauthorized write request")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"}
        )

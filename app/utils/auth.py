import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.config import Settings
from app.utils.validation_helpers import normalize_email


logger = logging.getLogger(__name__)

# HTTP Bearer scheme for JWT token. Missing headers are reported by
# `authorize` so the response is always 401.
bearer_scheme = HTTPBearer(
    scheme_name="JWT",
    description="Enter 'Bearer <your_jwt_token>'. Obtain the token via POST /jwt.",
    auto_error=False,
)


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


class TokenService:
    """Issues and verifies signed bearer tokens carrying an email claim."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_days: int = 365):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = timedelta(days=expire_days)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.access_token_secret,
            algorithm=settings.access_token_algorithm,
            expire_days=settings.access_token_expire_days,
        )

    def issue(self, claim: Dict[str, Any]) -> str:
        """Create a JWT for ``claim`` with an expiration time."""
        to_encode = dict(claim)
        to_encode["exp"] = datetime.now(timezone.utc) + self.expires_in
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """Return the decoded claim, without ``exp``."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"Rejected bearer token: {e}")
            raise unauthorized("Could not validate credentials")
        payload.pop("exp", None)
        return payload


def authorize_match(decoded_email: Optional[str], route_email: Optional[str]) -> None:
    """Both sides are compared in their normalized email form."""
    expected = normalize_email(decoded_email)
    if expected is None or expected != normalize_email(route_email):
        logger.warning(f"Token email {decoded_email} does not match route email {route_email}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden access")


def authorize(match_path_param: Optional[str] = None) -> Callable[..., Dict[str, Any]]:
    """
    Build a route dependency that requires a valid bearer token.

    When ``match_path_param`` is given, the token's ``email`` claim must also
    equal that path parameter. The dependency returns the decoded claim.
    """

    def dependency(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ) -> Dict[str, Any]:
        if credentials is None:
            raise unauthorized("Not authenticated")
        tokens: TokenService = request.app.state.tokens
        claims = tokens.verify(credentials.credentials)
        if match_path_param is not None:
            authorize_match(claims.get("email"), request.path_params.get(match_path_param))
        return claims

    return dependency

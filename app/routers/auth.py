import logging

from fastapi import APIRouter, Depends

from app.dependencies import get_tokens
from app.schemas.auth import TokenRequest, TokenResponse
from app.utils.auth import TokenService


logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["auth"],
)


@router.post("/jwt", response_model=TokenResponse)
def issue_token(claim: TokenRequest, tokens: TokenService = Depends(get_tokens)):
    """Sign the submitted claim into a long-lived bearer token."""
    token = tokens.issue(claim.model_dump(exclude_none=True))
    logger.debug(f"Issued token for {claim.email}")
    return TokenResponse(token=token)

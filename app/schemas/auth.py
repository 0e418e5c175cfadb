from pydantic import BaseModel, ConfigDict, EmailStr


class TokenRequest(BaseModel):
    """Claim to sign; anything besides ``email`` is carried through."""

    model_config = ConfigDict(extra="allow")

    email: EmailStr


class TokenResponse(BaseModel):
    token: str

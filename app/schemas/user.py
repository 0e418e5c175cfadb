from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr


class UserUpsert(BaseModel):
    """Profile fields sent by the client; unknown fields are stored as-is."""

    model_config = ConfigDict(extra="allow")

    email: Optional[EmailStr] = None
    name: Optional[str] = None
    photo: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class GuestInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    email: EmailStr
    name: Optional[str] = None
    image: Optional[str] = None


class BookingCreate(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    guest: GuestInfo
    host: EmailStr
    transaction_id: str = Field(alias="transactionId", min_length=1)
    room_id: Optional[str] = Field(default=None, alias="roomId")

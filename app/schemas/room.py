from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr


class HostInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    email: EmailStr
    name: Optional[str] = None
    image: Optional[str] = None


class RoomBase(BaseModel):
    model_config = ConfigDict(extra="allow")

    host: HostInfo
    booked: bool = False
    title: Optional[str] = None
    location: Optional[str] = None


class RoomCreate(RoomBase):
    pass


class RoomUpdate(RoomBase):
    pass


class RoomStatusUpdate(BaseModel):
    status: bool

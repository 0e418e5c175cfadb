import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.db import Collection
from app.dependencies import rooms_collection
from app.schemas.results import DeleteResult, InsertResult, UpdateResult
from app.schemas.room import RoomCreate, RoomStatusUpdate, RoomUpdate
from app.utils.auth import authorize
from app.utils.validation_helpers import validate_document_id, validate_email_param


logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["rooms"],
)


@router.get("/rooms", response_model=List[Dict[str, Any]])
def get_rooms(rooms: Collection = Depends(rooms_collection)):
    """
    Retrieve every room listing.
    """
    return rooms.find_many()


@router.get("/room/{room_id}", response_model=Optional[Dict[str, Any]])
def get_room(room_id: str, rooms: Collection = Depends(rooms_collection)):
    """
    Retrieve a single room by ID, or null if it does not exist.
    """
    validate_document_id(room_id)
    return rooms.find_one({"_id": room_id})


@router.get(
    "/rooms/{email}",
    response_model=List[Dict[str, Any]],
    dependencies=[Depends(authorize(match_path_param="email"))],
)
def get_host_rooms(email: str, rooms: Collection = Depends(rooms_collection)):
    """
    Retrieve the rooms listed by a host.
    Requires a token issued for the same email.
    """
    email = validate_email_param(email)
    result = rooms.find_many({"host.email": email})
    logger.debug(f"Host {email} has {len(result)} rooms")
    return result


@router.post("/rooms", response_model=InsertResult)
def create_room(room: RoomCreate, rooms: Collection = Depends(rooms_collection)):
    """
    Save a new room listing.
    """
    return rooms.insert_one(room.model_dump(exclude_none=True))


@router.patch("/rooms/status/{room_id}", response_model=UpdateResult)
def update_room_status(
    room_id: str,
    body: RoomStatusUpdate,
    rooms: Collection = Depends(rooms_collection),
):
    """
    Set a room's booked flag.
    """
    validate_document_id(room_id)
    result = rooms.update_one({"_id": room_id}, {"booked": body.status})
    if not result.matched_count:
        logger.error(f"Room not found: {room_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return result


@router.put("/rooms/{room_id}", response_model=UpdateResult)
def update_room(
    room_id: str,
    room: RoomUpdate,
    rooms: Collection = Depends(rooms_collection),
    claims: dict = Depends(authorize()),
):
    """
    Replace a room's listing fields, creating the room under this ID if needed.
    Requires authentication.
    """
    validate_document_id(room_id)
    result = rooms.update_one({"_id": room_id}, room.model_dump(exclude_unset=True), upsert=True)
    logger.debug(f"Room {room_id} saved by {claims.get('email')}: {result}")
    return result


@router.delete("/rooms/{room_id}", response_model=DeleteResult)
def delete_room(room_id: str, rooms: Collection = Depends(rooms_collection)):
    """
    Delete a room listing.
    """
    validate_document_id(room_id)
    result = rooms.delete_one({"_id": room_id})
    if not result.deleted_count:
        logger.error(f"Room not found: {room_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return result

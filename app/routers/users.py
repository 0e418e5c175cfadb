import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import EmailStr

from app.db import Collection
from app.dependencies import users_collection
from app.schemas.results import UpdateResult
from app.schemas.user import UserUpsert


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.put("/{email}", response_model=UpdateResult)
def save_user(email: EmailStr, user: UserUpsert, users: Collection = Depends(users_collection)):
    """
    Save a user's profile and role, creating the user on first sight.
    The path email is the user's key.
    """
    if user.email is not None and user.email != email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Body email does not match path email",
        )
    patch = user.model_dump(exclude_none=True)
    patch["email"] = email
    result = users.update_one({"email": email}, patch, upsert=True)
    logger.debug(f"Saved user {email}: {result}")
    return result


@router.get("/{email}", response_model=Optional[Dict[str, Any]])
def get_user(email: EmailStr, users: Collection = Depends(users_collection)):
    """Return the user document, or null when the email is unknown."""
    return users.find_one({"email": email})

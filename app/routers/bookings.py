import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from app.db import Collection
from app.dependencies import bookings_collection, get_notifier
from app.schemas.booking import BookingCreate
from app.schemas.results import DeleteResult, InsertResult
from app.utils.notifications import NotificationDispatcher, booking_notifications
from app.utils.validation_helpers import validate_document_id, validate_email_param


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"],
)


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    summary="List a guest's bookings",
    description="Retrieve the bookings made by the guest with the given email.",
)
def get_guest_bookings(
    email: Optional[str] = None,
    bookings: Collection = Depends(bookings_collection),
):
    """
    Retrieve the bookings made by a guest.

    - **email**: Guest email; required.
    """
    email = validate_email_param(email, "email query parameter")
    result = bookings.find_many({"guest.email": email})
    logger.debug(f"Retrieved {len(result)} bookings for guest {email}")
    return result


@router.get(
    "/host",
    response_model=List[Dict[str, Any]],
    summary="List a host's bookings",
    description="Retrieve the bookings made on rooms of the host with the given email.",
)
def get_host_bookings(
    email: Optional[str] = None,
    bookings: Collection = Depends(bookings_collection),
):
    """
    Retrieve the bookings received by a host.

    - **email**: Host email; required.
    """
    email = validate_email_param(email, "email query parameter")
    result = bookings.find_many({"host": email})
    logger.debug(f"Retrieved {len(result)} bookings for host {email}")
    return result


@router.post(
    "",
    response_model=InsertResult,
    summary="Create a booking",
    description="Save a booking and mail the guest and the host.",
)
def create_booking(
    booking: BookingCreate,
    background_tasks: BackgroundTasks,
    bookings: Collection = Depends(bookings_collection),
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    """
    Save a booking, then queue one email to the guest and one to the host.

    The booking is stored whether or not the emails go out; the room's
    booked flag is left to `PATCH /rooms/status/{id}`.

    Returns the insert result with the generated booking ID.
    """
    result = bookings.insert_one(booking.model_dump(by_alias=True, exclude_none=True))
    queued = notifier.schedule(
        background_tasks,
        booking_notifications(
            result.inserted_id,
            booking.transaction_id,
            booking.guest.email,
            booking.host,
        ),
    )
    logger.debug(f"Created booking: {result.inserted_id}, queued {queued} notifications")
    return result


@router.delete(
    "/{booking_id}",
    response_model=DeleteResult,
    summary="Delete a booking",
)
def delete_booking(booking_id: str, bookings: Collection = Depends(bookings_collection)):
    """
    Delete a booking.

    - **booking_id**: ID of the booking to delete.
    """
    validate_document_id(booking_id)
    result = bookings.delete_one({"_id": booking_id})
    if not result.deleted_count:
        logger.error(f"Booking not found: {booking_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    logger.debug(f"Deleted booking: {booking_id}")
    return result

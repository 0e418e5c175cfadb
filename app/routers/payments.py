from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_payments
from app.schemas.payment import PaymentIntentRequest, PaymentIntentResponse
from app.utils.auth import authorize
from app.utils.payments import PaymentError, PaymentGateway
from app.utils.validation_helpers import validate_price


router = APIRouter(
    tags=["payments"],
)


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    dependencies=[Depends(authorize())],
)
def create_payment_intent(body: PaymentIntentRequest, payments: PaymentGateway = Depends(get_payments)):
    """
    Create a card payment intent for the given price.
    Requires authentication.
    """
    price = validate_price(body.price)
    try:
        client_secret = payments.create_intent(price)
    except PaymentError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Payment processor error: {e}")
    return PaymentIntentResponse(client_secret=client_secret)

import logging
from decimal import Decimal

import stripe

from app.config import Settings


logger = logging.getLogger(__name__)


class PaymentError(Exception):
    pass


class PaymentGateway:
    """Creates Stripe payment intents and hands back their client secret."""

    def __init__(self, api_key: str, currency: str = "usd"):
        self.api_key = api_key
        self.currency = currency

    @classmethod
    def from_settings(cls, settings: Settings) -> "PaymentGateway":
        return cls(settings.stripe_secret_key, currency=settings.payment_currency)

    @staticmethod
    def to_minor_units(price: Decimal) -> int:
        return int(price * 100)

    def create_intent(self, price: Decimal) -> str:
        amount = self.to_minor_units(price)
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=self.currency,
                payment_method_types=["card"],
                api_key=self.api_key,
            )
        except stripe.StripeError as e:
            logger.error(f"Payment intent creation failed for amount {amount}: {e}")
            raise PaymentError(str(e)) from e
        logger.debug(f"Created payment intent {intent.id} for amount {amount} {self.currency}")
        return intent.client_secret

"""Stripe Checkout adapter for hosted payment sessions."""

from dataclasses import dataclass

import stripe

from photo_proofing.domain.orders import PaymentLineItem, PaymentSession
from photo_proofing.services.checkout import PaymentSessionClient


@dataclass
class StripeCheckoutClient(PaymentSessionClient):
    """Creates Stripe Checkout sessions in payment mode."""

    api_key: str
    currency: str = "usd"

    async def create_session(  # noqa: PLR0913
        self,
        *,
        line_items: list[PaymentLineItem],
        success_url: str,
        cancel_url: str,
        customer_email: str | None,
        metadata: dict[str, str],
    ) -> PaymentSession:
        """Create a Checkout session and return its id and redirect URL."""
        params: dict[str, object] = {
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": [self._line_item(item) for item in line_items],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "metadata": metadata,
        }
        if customer_email:
            params["customer_email"] = customer_email
        session = await stripe.checkout.Session.create_async(
            api_key=self.api_key, **params
        )
        if not session.url:
            raise RuntimeError("Stripe returned a session without a URL")
        return PaymentSession(id=session.id, url=session.url)

    def _line_item(self, item: PaymentLineItem) -> dict[str, object]:
        return {
            "price_data": {
                "currency": self.currency,
                "product_data": {
                    "name": item.name,
                    "description": item.description,
                },
                "unit_amount": item.unit_amount,
            },
            "quantity": item.quantity,
        }

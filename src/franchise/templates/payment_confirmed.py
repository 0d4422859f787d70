"""Payment confirmed: receipt for a brand claim."""

from decimal import Decimal

from franchise.notification.intents import PaymentConfirmed
from franchise.templates.layout import BRAND, base_url, wrap_html


def format_amount(amount: int, currency: str) -> str:
    major = (Decimal(amount) / Decimal(100)).quantize(Decimal("0.01"))
    return f"{major} {currency.upper()}"


class PaymentConfirmedTemplate:
    intent_type = PaymentConfirmed

    @staticmethod
    def render(intent: PaymentConfirmed) -> dict:
        paragraphs = [
            f"We received your payment of {format_amount(intent.amount, intent.currency)} "
            f"to claim {intent.brand_name}.",
            f"Reference: {intent.session_id}",
            "You can now respond to reviews of your brand from your franchisor dashboard.",
        ]
        url = f"{base_url()}/franchisor"
        return {
            "subject": f"Payment confirmed: {intent.brand_name}",
            "body": "\n\n".join([*paragraphs, url, f"The {BRAND} Team"]),
            "html_body": wrap_html("Payment Confirmed", paragraphs, ("Open Dashboard", url)),
        }

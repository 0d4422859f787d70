"""Response posted: tells a review's author the franchisor answered."""

from franchise.notification.intents import ReviewResponsePosted
from franchise.templates.layout import BRAND, base_url, wrap_html


class ResponsePostedTemplate:
    intent_type = ReviewResponsePosted

    @staticmethod
    def render(intent: ReviewResponsePosted) -> dict:
        url = f"{base_url()}/reviews/{intent.review_id}"
        paragraphs = [
            f"The franchisor of {intent.brand_name} has responded to your review:",
            f'"{intent.preview}"',
            "Your identity remains anonymous. The franchisor cannot see who wrote the review.",
        ]
        return {
            "subject": f"{intent.brand_name} responded to your review",
            "body": "\n\n".join([*paragraphs, url, f"The {BRAND} Team"]),
            "html_body": wrap_html(f"Response from {intent.brand_name}", paragraphs, ("View Full Response", url)),
        }

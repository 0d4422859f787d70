"""Review approved: tells the author their review is live."""

from franchise.notification.intents import ReviewApproved
from franchise.templates.layout import BRAND, base_url, wrap_html


class ReviewApprovedTemplate:
    intent_type = ReviewApproved

    @staticmethod
    def render(intent: ReviewApproved) -> dict:
        url = f"{base_url()}/reviews/{intent.review_id}"
        paragraphs = [
            f"Great news! Your review for {intent.brand_name} has been approved and is now live on {BRAND}.",
            "Thank you for sharing your franchise experience. Your feedback helps prospective "
            "franchise buyers make informed decisions.",
        ]
        return {
            "subject": "Your review has been published",
            "body": "\n\n".join([*paragraphs, url, f"The {BRAND} Team"]),
            "html_body": wrap_html("Your Review Has Been Published!", paragraphs, ("View Your Review", url)),
        }

"""Review rejected: tells the author why their review was not published."""

from franchise.notification.intents import ReviewRejected
from franchise.templates.layout import BRAND, base_url, wrap_html


class ReviewRejectedTemplate:
    intent_type = ReviewRejected

    @staticmethod
    def render(intent: ReviewRejected) -> dict:
        reason = intent.reason or "The review did not meet our community guidelines."
        paragraphs = [
            f"Thank you for submitting a review for {intent.brand_name}.",
            "Unfortunately, we were unable to publish your review at this time.",
            f"Reason: {reason}",
            "You're welcome to submit a new review that addresses the feedback above.",
        ]
        url = f"{base_url()}/franchisee/reviews/new"
        return {
            "subject": "Update on your review submission",
            "body": "\n\n".join([*paragraphs, url, f"The {BRAND} Team"]),
            "html_body": wrap_html("Update on Your Review Submission", paragraphs, ("Submit New Review", url)),
        }

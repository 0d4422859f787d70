"""New review: tells a brand's claim holder about a newly published review."""

from franchise.notification.intents import NewReviewForClaimedBrand
from franchise.templates.layout import BRAND, base_url, stars, wrap_html


class NewReviewTemplate:
    intent_type = NewReviewForClaimedBrand

    @staticmethod
    def render(intent: NewReviewForClaimedBrand) -> dict:
        url = f"{base_url()}/franchisor/reviews/{intent.review_id}"
        paragraphs = [
            stars(intent.rating),
            f'"{intent.preview}"',
            "A new review has been published for your brand. Responding to reviews shows "
            "franchisees that you value their feedback.",
        ]
        return {
            "subject": f"New review for {intent.brand_name}",
            "body": "\n\n".join([*paragraphs, url, f"The {BRAND} Team"]),
            "html_body": wrap_html(f"New Review for {intent.brand_name}", paragraphs, ("View & Respond", url)),
        }

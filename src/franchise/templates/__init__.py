"""Template registry: maps notification intent types to template classes."""

from franchise.templates.new_review import NewReviewTemplate
from franchise.templates.payment_confirmed import PaymentConfirmedTemplate
from franchise.templates.response_posted import ResponsePostedTemplate
from franchise.templates.review_approved import ReviewApprovedTemplate
from franchise.templates.review_rejected import ReviewRejectedTemplate

TEMPLATE_REGISTRY: dict[type, type] = {
    template.intent_type: template
    for template in (
        ReviewApprovedTemplate,
        ReviewRejectedTemplate,
        NewReviewTemplate,
        ResponsePostedTemplate,
        PaymentConfirmedTemplate,
    )
}


def get_template(intent_type: type):
    """Look up a template class by intent type."""
    template_cls = TEMPLATE_REGISTRY.get(intent_type)
    if template_cls is None:
        raise ValueError(f"No template registered for intent: {intent_type.__name__}")
    return template_cls

"""Shared BDD fixtures and step definitions for reviews."""

import pytest
from protean.exceptions import InvalidStateError, ValidationError
from pytest_bdd import given, parsers, then

from franchise.classifier.port import ClassificationResult
from franchise.review.events import (
    ReviewApproved,
    ReviewRejected,
    ReviewReported,
    ReviewResponseAdded,
    ReviewSubmitted,
)
from franchise.review.review import Review

_REVIEW_EVENT_CLASSES = {
    "ReviewSubmitted": ReviewSubmitted,
    "ReviewApproved": ReviewApproved,
    "ReviewRejected": ReviewRejected,
    "ReviewReported": ReviewReported,
    "ReviewResponseAdded": ReviewResponseAdded,
}


def _submit(author_id="author-bdd", overall=4):
    review = Review.submit(
        brand_id="brand-bdd",
        author_id=author_id,
        title="BDD Test Review",
        content="Training was thorough and the field team visits often.",
        ratings={"overall": overall},
        classification=ClassificationResult.fallback(),
    )
    review._events.clear()
    return review


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a pending review", target_fixture="review")
def pending_review():
    return _submit()


@given(parsers.cfparse('a pending review by "{author_id}"'), target_fixture="review")
def pending_review_by(author_id):
    return _submit(author_id=author_id)


@given("an approved review", target_fixture="review")
def approved_review():
    review = _submit()
    review.approve(moderator_id="mod-001")
    review._events.clear()
    return review


@given("a rejected review", target_fixture="review")
def rejected_review():
    review = _submit()
    review.reject(moderator_id="mod-001", notes="Spam")
    review._events.clear()
    return review


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the review status is "{status}"'))
def review_status_is(review, status):
    assert review.status == status


@then("the review action fails with an invalid state error")
def review_action_invalid_state(error):
    assert isinstance(error["exc"], InvalidStateError), f"Expected InvalidStateError, got {error['exc']!r}"


@then("the review action fails with a validation error")
def review_action_invalid(error):
    assert isinstance(error["exc"], ValidationError), f"Expected ValidationError, got {error['exc']!r}"


@then(parsers.cfparse("a {event_type} event is raised"))
def review_event_raised(review, event_type):
    event_cls = _REVIEW_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in review._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in review._events]}"


@then("no events are raised")
def no_events_raised(review):
    assert review._events == []

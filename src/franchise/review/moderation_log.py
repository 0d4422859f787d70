"""ModerationLog aggregate: append-only audit trail of moderation decisions.

A log entry is written in the same unit of work as the status change it
records and is never modified or deleted afterwards.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from franchise.domain import franchise


@franchise.aggregate
class ModerationLog:
    review_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    action = String(required=True, max_length=20)
    previous_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)
    notes = Text()
    created_at = DateTime(required=True)

    @classmethod
    def record(cls, review_id, moderator_id, action, previous_status, new_status, notes=None):
        return cls(
            review_id=str(review_id),
            moderator_id=str(moderator_id),
            action=action,
            previous_status=previous_status,
            new_status=new_status,
            notes=notes,
            created_at=datetime.now(UTC),
        )


def moderation_history(review_id) -> list[ModerationLog]:
    """Return a review's log entries, oldest first."""
    repo = current_domain.repository_for(ModerationLog)
    return repo._dao.query.filter(review_id=str(review_id)).order_by("created_at").all().items

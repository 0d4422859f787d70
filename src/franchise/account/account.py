"""Account aggregate: platform members referenced by reviews, claims and notifications.

Accounts carry only what the review and claim flows need: a contact email,
a display name, a role and the identity-verification flag that is copied
onto reviews at submission time. Credentials live elsewhere.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from franchise.account.events import AccountRegistered, AccountVerified
from franchise.domain import franchise

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AccountRole(Enum):
    BROWSER = "browser"
    FRANCHISEE = "franchisee"
    FRANCHISOR = "franchisor"
    ADMIN = "admin"


@franchise.aggregate
class Account:
    email = String(required=True, max_length=255, unique=True)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    role = String(choices=AccountRole, default=AccountRole.BROWSER.value)
    is_verified = Boolean(default=False)
    verified_at = DateTime()
    created_at = DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _EMAIL_RE.match(self.email):
            raise ValidationError({"email": ["Invalid email address"]})

    @property
    def display_name(self) -> str:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.email

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN.value

    @classmethod
    def register(cls, email, first_name=None, last_name=None, role=AccountRole.BROWSER.value):
        now = datetime.now(UTC)
        account = cls(
            email=email.strip().lower(),
            first_name=first_name,
            last_name=last_name,
            role=role,
            is_verified=False,
            created_at=now,
        )
        account.raise_(
            AccountRegistered(
                account_id=str(account.id),
                email=account.email,
                role=role,
                registered_at=now,
            )
        )
        return account

    def verify(self):
        """Mark the member's identity as verified. Verifying twice is a no-op."""
        if self.is_verified:
            return

        now = datetime.now(UTC)
        self.is_verified = True
        self.verified_at = now

        self.raise_(AccountVerified(account_id=str(self.id), verified_at=now))

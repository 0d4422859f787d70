"""Domain events for the Account aggregate."""

from protean.fields import DateTime, Identifier, String

from franchise.domain import franchise


@franchise.event(part_of="Account")
class AccountRegistered:
    """A member account was registered."""

    __version__ = 1

    account_id = Identifier(required=True)
    email = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


@franchise.event(part_of="Account")
class AccountVerified:
    """A member's identity was verified by an administrator."""

    __version__ = 1

    account_id = Identifier(required=True)
    verified_at = DateTime(required=True)

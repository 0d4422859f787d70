"""Email channel registry.

Uses the fake adapter by default; Postmark is used when POSTMARK_API_TOKEN
is set in the environment.
"""

import os

from franchise.channel.email_port import EmailPort

DEFAULT_FROM_ADDRESS = "notifications@zeeverify.com"

_email_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    """Return the configured email adapter (singleton)."""
    global _email_channel
    if _email_channel is None:
        token = os.getenv("POSTMARK_API_TOKEN")
        if token:
            from franchise.channel.postmark_email import PostmarkEmailAdapter

            _email_channel = PostmarkEmailAdapter(
                server_token=token,
                from_address=os.getenv("EMAIL_FROM_ADDRESS", DEFAULT_FROM_ADDRESS),
            )
        else:
            from franchise.channel.fake_email import FakeEmailAdapter

            _email_channel = FakeEmailAdapter()
    return _email_channel


def set_email_channel(channel: EmailPort) -> None:
    global _email_channel
    _email_channel = channel


def reset_email_channel() -> None:
    """Reset the channel singleton (useful for testing)."""
    global _email_channel
    _email_channel = None

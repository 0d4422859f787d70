"""Shared email layout: links and the branded HTML wrapper."""

import os
from html import escape

BRAND = "ZeeVerify"


def base_url() -> str:
    return os.getenv("BASE_URL", "http://localhost:5000").rstrip("/")


def stars(rating: int) -> str:
    filled = max(0, min(5, int(rating)))
    return "★" * filled + "☆" * (5 - filled)


def wrap_html(heading: str, paragraphs: list[str], link: tuple[str, str] | None = None) -> str:
    """Render a minimal branded HTML body. ``paragraphs`` are plain text and get escaped."""
    parts = [f"<h2>{escape(heading)}</h2>"]
    parts.extend(f"<p>{escape(p)}</p>" for p in paragraphs)
    if link:
        label, href = link
        parts.append(f'<p><a href="{escape(href, quote=True)}">{escape(label)}</a></p>')
    parts.append(f"<p>The {BRAND} Team</p>")
    return "<!DOCTYPE html><html><body>" + "".join(parts) + "</body></html>"

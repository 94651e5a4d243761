"""Email address canonical form used for storage and every lookup."""
from __future__ import annotations


def normalize_email(value: str | None) -> str:
    """``" Neo@Example.COM "`` -> ``"neo@example.com"``."""
    return (value or "").strip().lower()

"""Member management REST API (signup with email verification, profile, password, deletion)."""

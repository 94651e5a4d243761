"""
Core utilities shared across the member API.

This package hosts configuration, logging setup, business error codes,
password hashing, the SMTP mailer and the rate limit helper. Services and
routers depend on these primitives instead of reading os.environ or talking
to SMTP directly.
"""

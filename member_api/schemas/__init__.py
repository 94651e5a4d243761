"""Request/response shapes exchanged over HTTP (camelCase on the wire)."""

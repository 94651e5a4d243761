"""
Use cases for the member API.

Each service orchestrates repositories/adapters to implement business rules
(email verification, signup, ownership checks, sessions). Routers call these
services instead of touching the database directly.
"""

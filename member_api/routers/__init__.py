"""
FastAPI routers grouped by domain (members, emails, auth).

Each module exposes an APIRouter included by the app factory (app.py).
Services are looked up on ``app.state`` through the helpers in ``deps``.
"""

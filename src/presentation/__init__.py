"""Presentation layer - API endpoints and HTTP concerns.

This layer contains FastAPI routers, cookie transport and request
dependencies. It dispatches commands to the application layer and
translates results to HTTP responses.

Structure:
- routers/system.py: root and health
- routers/api/cookie_transport.py: session cookies and Bearer fallback
- routers/api/middleware/: trace IDs, authentication and role gating
- routers/api/v1/: session endpoints and error envelope handlers

The presentation layer depends on the application layer but contains NO
business logic.
"""

"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- Database repositories
- Security services (JWT, refresh token hashing, bcrypt, login limiter)
- Structured logging
- HTTP client for the session API

Structure:
- persistence/: SQLAlchemy models, database manager and repositories
- security/: Token, password and brute-force services
- logging/: structlog console adapter
- clients/: httpx client with single-flight refresh

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""

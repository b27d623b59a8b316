"""Test suite for the authentication session service.

Test structure follows the test pyramid:
- unit/: Unit tests - handlers, services and helpers in isolation
- integration/: Integration tests - real crypto, SQLite database, HTTP client
- api/: API endpoint tests - HTTP mapping (stubbed handlers) and end-to-end

Tests run against a temporary SQLite database (aiosqlite); no external
services are needed.
"""

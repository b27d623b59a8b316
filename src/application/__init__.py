"""Application layer - use cases and orchestration.

Structure:
- commands/: Command dataclasses and handlers (login, refresh, logout,
  logout-all, change password)
- services/: Refresh token store

The application layer orchestrates domain logic through protocols and
never imports infrastructure adapters.
"""

"""Runtime environments.

Cookie security attributes and the log renderer depend on the environment:
- DEVELOPMENT: console logs, lax cookies over plain HTTP
- TESTING / CI: JSON logs, lax cookies
- PRODUCTION: JSON logs, ``Secure`` + ``SameSite=strict`` cookies
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"

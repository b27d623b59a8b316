"""Startup configuration errors.

Unlike handler failures (returned as ``Result``), a configuration error is
raised: the process cannot serve requests without its signing secrets, so
``get_settings()`` turns it into a logged, non-zero exit.
"""


class ConfigurationError(Exception):
    """Mandatory configuration is missing or unusable.

    Attributes:
        variable: Environment variable name (never its value).
    """

    def __init__(self, variable: str, message: str | None = None) -> None:
        self.variable = variable
        super().__init__(message or f"Missing required environment variable: {variable}")

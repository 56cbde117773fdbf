"""Custom exception hierarchy for the query gateway."""


class GatewayError(Exception):
    """Base exception for gateway-level issues."""


class ConfigurationError(GatewayError):
    """Raised when configuration is invalid or missing."""


class ExternalServiceError(GatewayError):
    """Raised when the archive API fails or responds with an error."""

    def __init__(self, detail: str, *, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class SchemaUnavailableError(GatewayError):
    """Raised when the schema endpoint does not list any tables."""

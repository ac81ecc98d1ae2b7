"""S3-to-GCS shim custom exceptions.

Exception Design Principles:
1. Raise these only when they carry context the underlying exception lacks
2. Transport and HTTP status errors stay as httpx exceptions
3. Split on who can act on the failure:
   - Recoverable by fixing credentials or identity (AuthError)
   - Recoverable by reconfiguration before startup (ConfigError)
"""


class ShimError(Exception):
    """Base exception for all shim errors.

    Carries optional error details, remedial suggestions and context on top
    of the message.
    """

    def __init__(
        self,
        message: str,
        *,
        errors: list[str] = None,  # detailed list of errors (if available)
        suggestions: list[str] = None,  # remedial actions
        context: dict = None,  # additional detailed context
    ):
        """Initialize ShimError.

        Args:
            message: Primary error message for users
            errors: List of specific error details
            suggestions: List of actionable suggestions for resolution
            context: Additional context information as key-value pairs
        """
        super().__init__(message)
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        self.context = context or {}


class AuthError(ShimError):
    """Credential errors - fatal to the request that needed the credential.

    Raised when the identity service cannot produce a bearer token, or the
    credential cache cannot hand out a live one:
    - No ambient credentials available (no ADC, no metadata server)
    - Token refresh rejected by the identity service
    - Identity service response missing an access token

    Never retried here. A request that hits this error is aborted before
    any byte reaches the transport.
    """

    pass


class ConfigError(ShimError):
    """Application configuration errors - recoverable by user reconfiguration.

    Covers setup issues detected at startup:
    - Missing project id or endpoint
    - Signing mode without the keys it needs
    - Static credential source without a token
    """

    pass

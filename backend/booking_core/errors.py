"""Domain error taxonomy. The API layer maps each class to an HTTP status and a stable code."""


class ChargeHubError(Exception):
    """Base class for all domain errors."""

    code = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ChargeHubError):
    """Malformed or missing input; nothing was written."""

    code = "validation_error"


class AuthenticationError(ChargeHubError):
    """No valid session (missing/expired/revoked token, bad credentials)."""

    code = "not_authenticated"


class AuthorizationError(ChargeHubError):
    """Authenticated, but the actor's role or ownership does not allow the action."""

    code = "forbidden"


class NotFoundError(ChargeHubError):
    code = "not_found"


class ConflictError(ChargeHubError):
    """Target no longer in the expected state (slot taken, registration already reviewed).

    Callers should refresh their view rather than retry.
    """

    code = "conflict"


class TransientServiceError(ChargeHubError):
    """Storage unavailable or busy; no state was changed and the call is safe to retry."""

    code = "transient"

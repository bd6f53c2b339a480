# core/errors.py

"""
Error taxonomy shared by every panel.

Services raise these; the exception handlers registered in main.create_app
turn them into HTTP responses. None of them is fatal to the session.
"""

from core.logging_config import logger


class PortalError(Exception):
    """Base class for user-facing failures."""

    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def public_detail(self) -> str:
        return self.message


class ValidationError(PortalError):
    """A required field is missing or malformed. Reported inline, never retried."""

    status_code = 400
    default_message = "Invalid request"


class AuthorizationError(PortalError):
    """
    Capability check failed.
    The detail is always the same so responses never reveal role or tenant layout.
    """

    status_code = 403
    default_message = "Not permitted"

    @property
    def public_detail(self) -> str:
        return self.default_message


class NotFoundError(PortalError):
    status_code = 404
    default_message = "Resource not found"


class InvalidTransition(PortalError):
    """State-machine precondition violated (terminal state, lost race)."""

    status_code = 409
    default_message = "Invalid status transition"


class StoreError(PortalError):
    """Remote row/object store failure. The core does not retry."""

    status_code = 503
    default_message = "The service is temporarily unavailable, please try again"

    @property
    def public_detail(self) -> str:
        return self.default_message


def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • botocore ClientError
      • Generic Python exceptions
    """

    # Case 1: Supabase Auth / PostgREST errors
    if hasattr(error, "message"):
        try:
            return str(error.message)
        except Exception:
            pass

    # Case 2: botocore ClientError
    response = getattr(error, "response", None)
    if isinstance(response, dict) and "Error" in response:
        err = response["Error"]
        return f"{err.get('Code', 'Unknown')}: {err.get('Message', '')}"

    # Case 3: errors with args (common)
    if hasattr(error, "args") and error.args:
        try:
            return str(error.args[0])
        except Exception:
            pass

    # Case 4: Plain string fallback
    try:
        return str(error)
    except Exception:
        return "Unknown store error"


def store_error(error: Exception, operation: str = "Store operation") -> StoreError:
    """
    Log the underlying detail and return a StoreError (doesn't raise) so the
    caller can `raise store_error(e, "...") from e`.
    """
    detail = extract_supabase_error(error)
    logger.error(f"{operation} failed: {detail}")
    return StoreError()

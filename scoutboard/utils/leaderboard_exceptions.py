"""
Custom exceptions for the scoutboard client with user-friendly error messages.
"""

from typing import Optional

class ScoutboardException(Exception):
    """Base exception for scoutboard errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class ValidationError(ScoutboardException):
    """Raised when a backend record breaks an aggregate invariant."""
    def __init__(self, field: str, reason: str, record_id: Optional[str] = None):
        self.field = field
        self.reason = reason
        self.record_id = record_id
        where = f" (record {record_id})" if record_id else ""
        super().__init__(
            f"Invalid field '{field}'{where}: {reason}",
            "❌ Some leaderboard data could not be shown."
        )

class ConfigurationError(ScoutboardException):
    """Raised when the scout level table cannot be used."""
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            f"Invalid scout level table: {reason}",
            "❌ Scout levels are misconfigured. Please contact the administrator."
        )

class BackendError(ScoutboardException):
    """Base exception for failures talking to the backend script."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message, user_message or f"❌ {message}")

class BackendNetworkError(BackendError):
    """Raised when the backend cannot be reached."""
    def __init__(self, details: str = None):
        super().__init__(
            f"Network error contacting backend: {details}",
            "❌ A network error occurred. Please check your connection and try again."
        )

class BackendPermissionError(BackendError):
    """Raised when the backend answers with an HTML error page."""
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(
            f"The server returned an HTML error page (Status: {status_code})",
            "❌ The backend script is not accessible. Check its deployment permissions."
        )

class BackendResponseError(BackendError):
    """Raised when the backend responds with an error status or an unreadable body."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)

class BackendScriptError(BackendError):
    """Raised when the backend script reports a failure."""
    def __init__(self, message: str = None):
        super().__init__(message or "The script reported an unspecified error.")

class MissingFieldError(BackendError):
    """Raised when a successful response lacks the expected data."""
    def __init__(self, action: str, field: str):
        self.action = action
        self.field = field
        super().__init__(f"'{field}' not found in the script's response to {action}")

class SubmissionError(ScoutboardException):
    """Raised when a rating batch cannot be submitted."""
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            f"Rating submission rejected: {reason}",
            f"❌ {reason}"
        )

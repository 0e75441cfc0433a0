"""Exception types shared by the emulator, provider and test driver."""

from fss.schemas.error import ErrorResponse


class ServiceError(Exception):
    """Structured control plane error that maps directly to error payloads."""

    def __init__(self, status_code: int, code: str, message: str, details: dict | None = None) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(code=code, message=message, details=details)
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.payload.code


class ConfigurationError(Exception):
    """Raised when a configuration cannot be ordered or resolved."""


class SetupError(Exception):
    """Raised when the environment is missing a required setting."""


class WaitTimeoutError(Exception):
    """Raised when a remote object never reaches the expected lifecycle state."""

    def __init__(self, message: str, *, last_state: str | None = None) -> None:
        self.last_state = last_state
        super().__init__(message)


class CheckFailure(AssertionError):
    """A state assertion did not hold."""


class StepFailure(AssertionError):
    """A lifecycle step failed; carries the 1-based step index."""

    def __init__(self, step_number: int, message: str) -> None:
        self.step_number = step_number
        super().__init__(f"Step {step_number} error: {message}")


def not_found_error() -> ServiceError:
    return ServiceError(
        status_code=404,
        code="NotAuthorizedOrNotFound",
        message="Authorization failed or requested resource not found.",
    )


__all__ = [
    "CheckFailure",
    "ConfigurationError",
    "ServiceError",
    "SetupError",
    "StepFailure",
    "WaitTimeoutError",
    "not_found_error",
]

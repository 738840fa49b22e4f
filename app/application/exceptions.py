from __future__ import annotations


class OnboardingApiError(RuntimeError):
    """Raised when an onboarding API call fails (HTTP error, timeout, network)."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class SessionExpiredError(OnboardingApiError):
    """Raised when the server no longer knows the session (expired or invalid)."""
    pass


class UnauthorizedError(OnboardingApiError):
    """Raised on 401; stored credentials have already been cleared."""
    pass


class OnboardingBusyError(RuntimeError):
    """Raised when a network-calling operation is started while another is in flight."""
    pass


class SessionNotFoundError(LookupError):
    pass


class StepsIncompleteError(ValueError):
    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Please complete these steps first: {', '.join(missing)}")
        self.missing = missing

"""Exception hierarchy raised while configuring the Calico provider.

Every error carries the resolution ``step`` that failed so the host can tell a
rejected option apart from an unreachable datastore without parsing messages.
None of these errors are retried by the provider itself.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ProviderError(Exception):
    """Base class for provider configuration failures.

    Attributes
    ----------
    message:
        Human readable description of the failure.
    step:
        Name of the resolution step that failed (``validate``, ``connect``,
        ``load``).
    context:
        Extra key/value pairs rendered after the message.
    """

    step = "resolve"

    def __init__(
        self,
        message: str,
        *,
        step: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if step is not None:
            self.step = step
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.step}: {self.message} ({context_str})"
        return f"{self.step}: {self.message}"


class ValidationError(ProviderError):
    """An option value is outside its allowed set."""

    step = "validate"

    def __init__(self, option: str, message: str, **kwargs: Any) -> None:
        super().__init__(f"{option!r}: {message}", **kwargs)
        self.option = option


class DatastoreConnectionError(ProviderError):
    """The datastore client factory refused the connection descriptor."""

    step = "connect"

    def __init__(self, cause: BaseException, **kwargs: Any) -> None:
        super().__init__(str(cause), **kwargs)
        self.cause = cause


class ConfigurationError(ProviderError):
    """The freshly built client failed its load-and-validate check."""

    step = "load"

    def __init__(self, message: str, *, cause: Optional[BaseException] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.cause = cause

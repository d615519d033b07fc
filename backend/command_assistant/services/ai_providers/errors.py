"""
Error types shared by the provider services.

AIError is a returned value (configuration problems, missing models, failed
probes). The exceptions are raised only by command generation.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AIError:
    """Structured failure result: HTTP-style status code and a user-facing message."""

    code: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


class ProviderConfigurationError(ValueError):
    """The stored configuration cannot be used with the selected provider."""


class ProviderRequestError(Exception):
    """A provider answered a generation request with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

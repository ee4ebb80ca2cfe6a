"""
Exception types for clientip.

Resolution itself never raises; these are only raised while building a
configuration, so mistakes surface at startup rather than per request.
"""

from typing import Any, Optional


class ClientIPError(ValueError):
    """
    Base exception for configuration errors.

    Attributes:
        message: Error message
        value: The offending configuration value
    """

    def __init__(self, message: str, value: Optional[Any] = None):
        super().__init__(message)
        self.value = value

    def __repr__(self):
        return f"<{self.__class__.__name__}('{str(self)}', value={self.value!r})>"


class InvalidHeaderSpecError(ClientIPError):
    """Raised when a header specification is neither a name nor a (name, constraints) pair"""
    pass


class InvalidTrustSpecError(ClientIPError):
    """
    Raised when an allow-list entry cannot be compiled.

    Only the CIDR matcher validates entries; with exact matching any string
    is accepted as-is.
    """
    pass

"""
Custom exceptions for HRworks client library.
"""


class HRworksClientError(Exception):
    """Base exception for HRworks client errors."""
    pass


class ConfigurationError(HRworksClientError):
    """Raised when client configuration is invalid."""
    pass


class RequestNotPreparedError(HRworksClientError):
    """Raised when signed values are read before a request is bound to a signer."""
    pass


class UnknownOperationError(HRworksClientError):
    """Raised when no operation is registered for a target."""
    pass


class ResponseError(HRworksClientError):
    """
    Raised when the HRworks API answers with a non-success status.

    The raw response is kept so callers can inspect status and body.
    """

    def __init__(self, response):
        self.response = response
        self.status_code = response.status_code
        self.body = response.text
        super().__init__(f"Invalid Response: {self.status_code} - {self.body}")

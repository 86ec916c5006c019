"""
DNS API Client Exceptions

Custom exception hierarchy for DNS API operations.

Only problems that stop a request from completing are raised. Result codes
reported by the remote service are returned as data (see models.OperationResult).
"""


class DNSAPIError(Exception):
    """Base DNS API exception."""

    def __init__(self, message: str, code: int = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self):
        if self.code is not None:
            return f"[{self.code}] {self.message}"
        return self.message


class DNSAPITransportError(DNSAPIError):
    """HTTP request to the DNS API failed."""

    def __init__(self, message: str = "Request failed", status_code: int = None):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self):
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class DNSAPIParameterError(DNSAPIError):
    """Request is missing fields required by its operation."""

    def __init__(self, message: str = "Parameter value error", field: str = None):
        super().__init__(message)
        self.field = field

"""
DIGINET DNS API Client

Python client for the QuickServiceBox DNS record management API (SOAP/XML over HTTPS).
"""

__version__ = "0.1.0"

from diginet_dns.client import DNSAPIClient
from diginet_dns.transport import HTTPTransport
from diginet_dns.models import (
    DNSRecord,
    Operation,
    OperationRequest,
    OperationResult,
    RecordListResult,
    RESULT_MESSAGES,
    UNKNOWN_RESULT_CODE,
)
from diginet_dns.xml_builder import XMLBuilder
from diginet_dns.xml_parser import XMLParser, extract_value
from diginet_dns.exceptions import (
    DNSAPIError,
    DNSAPITransportError,
    DNSAPIParameterError,
)

__all__ = [
    # Client
    "DNSAPIClient",
    "HTTPTransport",
    # Models
    "DNSRecord",
    "Operation",
    "OperationRequest",
    "OperationResult",
    "RecordListResult",
    "RESULT_MESSAGES",
    "UNKNOWN_RESULT_CODE",
    # XML
    "XMLBuilder",
    "XMLParser",
    "extract_value",
    # Exceptions
    "DNSAPIError",
    "DNSAPITransportError",
    "DNSAPIParameterError",
]

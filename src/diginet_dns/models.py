"""
DNS API Client Models

Data classes for DNS API requests and responses.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from diginet_dns.exceptions import DNSAPIParameterError


# =============================================================================
# Result Codes
# =============================================================================

# Returned when <resultCode> is missing or not a number
UNKNOWN_RESULT_CODE = -1

UNKNOWN_RESULT_MESSAGE = "Unknown result code"

RESULT_MESSAGES = {
    0: "Operation successful",
    1: "Authentication failed",
    2: "Operation failed - cannot modify read-only value",
    3: "Operation failed - invalid parameters",
    4: "Operation failed - undefined error",
    5: "Operation failed - object not found",
    6: "Operation failed - object in use",
}

# Sub-code bit -> description. Advisory only, bits above 5 are not described.
SUB_CODE_FLAGS = {
    0: "Domain validation issue",
    1: "Host validation issue",
    2: "Record type validation issue",
    3: "Data validation issue",
    4: "TTL validation issue",
    5: "Priority validation issue",
}


def result_message(code: int) -> str:
    """Get human-readable message for a result code."""
    return RESULT_MESSAGES.get(code, UNKNOWN_RESULT_MESSAGE)


def decode_sub_code(sub_code: int) -> List[str]:
    """
    Describe the set bits of a result sub-code.

    Args:
        sub_code: resultSubCode value

    Returns:
        One "Bit N: description" entry per known set bit, lowest bit first
    """
    return [
        f"Bit {bit}: {description}"
        for bit, description in SUB_CODE_FLAGS.items()
        if sub_code & (1 << bit)
    ]


# =============================================================================
# Request Models
# =============================================================================

class Operation(Enum):
    """Remote DNS API operation, valued by its SOAP body element name."""
    ADD = "recordAdd"
    UPDATE = "recordUpdate"
    DELETE = "recordDelete"
    LIST = "recordGetList"


@dataclass(frozen=True)
class DNSRecord:
    """A single DNS record.

    Every field is optional because records decoded from a listing keep
    absent tags as None. Requests fill missing values with protocol defaults
    when the envelope is built.
    """
    domain: Optional[str] = None
    host: Optional[str] = None
    record_type: Optional[str] = None
    data: Optional[str] = None
    ttl: Optional[int] = None
    priority: Optional[int] = None  # Only meaningful for MX-like types
    read_only: Optional[bool] = None
    suspended: Optional[bool] = None
    suspension_reason: Optional[str] = None


@dataclass(frozen=True)
class OperationRequest:
    """One call to the DNS API.

    The password is already base64 encoded by the caller and is treated as
    an opaque string. It is kept out of repr() so it never reaches logs.
    """
    operation: Operation
    username: str
    password_b64: str = field(repr=False)
    record: Optional[DNSRecord] = None
    old_record: Optional[DNSRecord] = None
    new_record: Optional[DNSRecord] = None
    domain_name: Optional[str] = None

    @classmethod
    def add(cls, username: str, password_b64: str, record: DNSRecord) -> "OperationRequest":
        """Create recordAdd request."""
        _require("record", record)
        return cls(Operation.ADD, username, password_b64, record=record)

    @classmethod
    def delete(cls, username: str, password_b64: str, record: DNSRecord) -> "OperationRequest":
        """Create recordDelete request."""
        _require("record", record)
        return cls(Operation.DELETE, username, password_b64, record=record)

    @classmethod
    def update(
        cls,
        username: str,
        password_b64: str,
        old_record: DNSRecord,
        new_record: DNSRecord,
    ) -> "OperationRequest":
        """Create recordUpdate request."""
        _require("old_record", old_record)
        _require("new_record", new_record)
        return cls(
            Operation.UPDATE,
            username,
            password_b64,
            old_record=old_record,
            new_record=new_record,
        )

    @classmethod
    def list_records(cls, username: str, password_b64: str, domain_name: str) -> "OperationRequest":
        """Create recordGetList request."""
        _require("domain_name", domain_name)
        return cls(Operation.LIST, username, password_b64, domain_name=domain_name)


def _require(name: str, value) -> None:
    if value is None:
        raise DNSAPIParameterError(f"Missing required field: {name}", field=name)


# =============================================================================
# Response Models
# =============================================================================

@dataclass
class OperationResult:
    """Result fields common to every DNS API response."""
    code: int = UNKNOWN_RESULT_CODE
    sub_code: int = 0
    text: Optional[str] = None
    raw_xml: Optional[str] = None

    @property
    def message(self) -> str:
        """Human-readable message for the result code."""
        return result_message(self.code)

    @property
    def success(self) -> bool:
        """Check if response indicates success."""
        return self.code == 0

    @property
    def sub_code_details(self) -> List[str]:
        """Describe set bits of the sub-code."""
        return decode_sub_code(self.sub_code)


@dataclass
class RecordListResult:
    """recordGetList response.

    item_count is resultItemCount exactly as reported by the service. It is
    not checked against len(records).
    """
    result: OperationResult
    records: List[DNSRecord] = field(default_factory=list)
    item_count: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.result.success

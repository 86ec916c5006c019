"""
DNS API XML Builder

Builds SOAP 1.1 request envelopes for the QuickServiceBox DNS API.

Envelopes are produced from fixed text templates rather than an element tree:
the service is sensitive to element order and layout, and field values are
inserted exactly as given (no XML escaping).
"""

from typing import Optional

from diginet_dns.exceptions import DNSAPIParameterError
from diginet_dns.models import DNSRecord, Operation, OperationRequest

# Single endpoint shared by every operation
API_ENDPOINT = "https://api.quickservicebox.com/API/Beta/DNSAPI.asmx"

# Namespace bound to the operation body element
DNSAPI_NS = "https://api.quickservicebox.com/DNS/DNSAPI"

CONTENT_TYPE = "text/xml; charset=utf-8"

# recordUpdate is sent unquoted, the other actions quoted
SOAP_ACTIONS = {
    Operation.ADD: f'"{DNSAPI_NS}/recordAdd"',
    Operation.UPDATE: f"{DNSAPI_NS}/recordUpdate",
    Operation.DELETE: f'"{DNSAPI_NS}/recordDelete"',
    Operation.LIST: f'"{DNSAPI_NS}/recordGetList"',
}

_XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'

_ENVELOPE_OPEN = (
    '<soap:Envelope xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
    'xmlns:xsd="http://www.w3.org/2001/XMLSchema" '
    'xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">\n'
)

_RECORD_FIELDS = ("DomainName", "HostName", "RecordType", "Data", "TTL", "Priority")


def soap_action(operation: Operation) -> str:
    """Get SOAPAction header value for an operation."""
    return SOAP_ACTIONS[operation]


def _record_values(record: DNSRecord) -> tuple:
    """Record fields in wire order, with protocol defaults for gaps."""
    return (
        record.domain if record.domain is not None else "",
        record.host if record.host is not None else "",
        record.record_type if record.record_type is not None else "",
        record.data if record.data is not None else "",
        record.ttl if record.ttl is not None else 0,
        record.priority if record.priority is not None else 0,
    )


def _record_block(name: str, record: DNSRecord, indent: str = "") -> str:
    """Render a <record>-style block, one field per line."""
    inner = indent + " " if indent else ""
    lines = [f"{indent}<{name}>\n"]
    for tag, value in zip(_RECORD_FIELDS, _record_values(record)):
        lines.append(f"{inner}<{tag}>{value}</{tag}>\n")
    lines.append(f"{indent}</{name}>\n")
    return "".join(lines)


def _envelope(operation: Operation, username: str, password_b64: str, payload: str) -> str:
    """Wrap operation payload in the flat SOAP envelope."""
    name = operation.value
    return (
        _XML_DECLARATION
        + _ENVELOPE_OPEN
        + "<soap:Body>\n"
        + f'<{name} xmlns="{DNSAPI_NS}">\n'
        + f"<accountUsername>{username}</accountUsername>\n"
        + f"<accountPasswordB64>{password_b64}</accountPasswordB64>\n"
        + payload
        + f"</{name}>\n"
        + "</soap:Body>\n"
        + "</soap:Envelope>"
    )


class XMLBuilder:
    """
    Builds DNS API SOAP envelopes.

    All methods are static and return the envelope as text ready to send.
    """

    @staticmethod
    def build_record_add(username: str, password_b64: str, record: DNSRecord) -> str:
        """
        Build recordAdd envelope.

        Args:
            username: Account username
            password_b64: Base64 encoded account password
            record: Record to add

        Returns:
            SOAP envelope text
        """
        return _envelope(
            Operation.ADD, username, password_b64, _record_block("record", record)
        )

    @staticmethod
    def build_record_delete(username: str, password_b64: str, record: DNSRecord) -> str:
        """
        Build recordDelete envelope.

        Args:
            username: Account username
            password_b64: Base64 encoded account password
            record: Record to delete, matched on all six fields

        Returns:
            SOAP envelope text
        """
        return _envelope(
            Operation.DELETE, username, password_b64, _record_block("record", record)
        )

    @staticmethod
    def build_record_update(
        username: str,
        password_b64: str,
        old_record: DNSRecord,
        new_record: DNSRecord,
    ) -> str:
        """
        Build recordUpdate envelope.

        Unlike the other operations this envelope is indented, which is the
        layout the service was verified against.

        Args:
            username: Account username
            password_b64: Base64 encoded account password
            old_record: Record as it currently exists
            new_record: Replacement values

        Returns:
            SOAP envelope text
        """
        name = Operation.UPDATE.value
        return (
            _XML_DECLARATION
            + _ENVELOPE_OPEN
            + " <soap:Body>\n"
            + f'  <{name} xmlns="{DNSAPI_NS}">\n'
            + f"   <accountUsername>{username}</accountUsername>\n"
            + f"   <accountPasswordB64>{password_b64}</accountPasswordB64>\n"
            + _record_block("oldRecord", old_record, indent="   ")
            + _record_block("newRecord", new_record, indent="   ")
            + f"  </{name}>\n"
            + " </soap:Body>\n"
            + "</soap:Envelope>"
        )

    @staticmethod
    def build_record_list(username: str, password_b64: str, domain_name: str) -> str:
        """
        Build recordGetList envelope.

        Args:
            username: Account username
            password_b64: Base64 encoded account password
            domain_name: Domain whose records to list

        Returns:
            SOAP envelope text
        """
        return _envelope(
            Operation.LIST,
            username,
            password_b64,
            f"<domainName>{domain_name}</domainName>\n",
        )

    @staticmethod
    def build(request: OperationRequest) -> str:
        """
        Build envelope for any operation request.

        Args:
            request: Operation request

        Returns:
            SOAP envelope text

        Raises:
            DNSAPIParameterError: If the request lacks its operation's fields
        """
        op = request.operation

        if op in (Operation.ADD, Operation.DELETE):
            record = _required(request.record, "record")
            if op == Operation.ADD:
                return XMLBuilder.build_record_add(request.username, request.password_b64, record)
            return XMLBuilder.build_record_delete(request.username, request.password_b64, record)

        if op == Operation.UPDATE:
            return XMLBuilder.build_record_update(
                request.username,
                request.password_b64,
                _required(request.old_record, "old_record"),
                _required(request.new_record, "new_record"),
            )

        if op == Operation.LIST:
            return XMLBuilder.build_record_list(
                request.username,
                request.password_b64,
                _required(request.domain_name, "domain_name"),
            )

        raise DNSAPIParameterError(f"Unsupported operation: {op}")


def _required(value: Optional[object], name: str):
    if value is None:
        raise DNSAPIParameterError(f"Missing required field: {name}", field=name)
    return value

"""
CLI Output Formatting

Handles JSON, text, and raw XML output formats.
"""

import json
import sys
from typing import Any, Dict, List, Optional, Union

from lxml import etree

from diginet_dns.models import DNSRecord, OperationResult, RecordListResult

NO_RESPONSE_ERROR = "No response data to parse"

# Strict parser: anything it rejects is shown exactly as received
_display_parser = etree.XMLParser(
    resolve_entities=False,
    no_network=True,
    remove_blank_text=True,
)

Renderable = Union[OperationResult, RecordListResult, None]


# =============================================================================
# JSON
# =============================================================================

def _dumps(obj: Any) -> str:
    # ensure_ascii=False escapes only quote, backslash and control characters
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


def result_to_dict(result: OperationResult) -> Dict[str, Any]:
    """Convert result fields to JSON-ready dict."""
    data = {
        "code": result.code,
        "message": result.message,
        "subCode": result.sub_code,
    }
    if result.text is not None:
        data["text"] = result.text
    return data


def record_to_dict(record: DNSRecord) -> Dict[str, Any]:
    """Convert record to JSON-ready dict, leaving out absent fields."""
    data = {}
    if record.domain is not None:
        data["domain"] = record.domain
    if record.host is not None:
        data["host"] = record.host
    if record.record_type is not None:
        data["type"] = record.record_type
    if record.data is not None:
        data["data"] = record.data
    if record.ttl is not None:
        data["ttl"] = record.ttl
    if record.priority is not None:
        data["priority"] = record.priority
    if record.read_only is not None:
        data["readOnly"] = record.read_only
    if record.suspended is not None:
        data["suspended"] = record.suspended
    if record.suspension_reason:
        data["suspensionReason"] = record.suspension_reason
    return data


def render_json(result: Renderable) -> str:
    """
    Render a decoded response as single-line JSON.

    Args:
        result: OperationResult, RecordListResult, or None for an empty response

    Returns:
        JSON text without trailing newline
    """
    if result is None:
        return json.dumps({"error": NO_RESPONSE_ERROR})

    if isinstance(result, RecordListResult):
        data = {
            "result": result_to_dict(result.result),
            "records": [record_to_dict(r) for r in result.records],
        }
        if result.item_count is not None:
            data["recordCount"] = result.item_count
        return _dumps(data)

    return _dumps({"result": result_to_dict(result)})


# =============================================================================
# Text
# =============================================================================

_RECORD_COLUMNS = [
    ("domain", "Domain"),
    ("host", "Host"),
    ("record_type", "Type"),
    ("data", "Data"),
    ("ttl", "TTL"),
    ("priority", "Priority"),
    ("read_only", "Read Only"),
    ("suspended", "Suspended"),
    ("suspension_reason", "Suspension Reason"),
]


def format_value(value: Any) -> str:
    """
    Format a single value for display.

    Args:
        value: Value to format

    Returns:
        Formatted string
    """
    if value is None:
        return ""

    if isinstance(value, bool):
        return "Yes" if value else "No"

    return str(value)


def format_record_table(records: List[DNSRecord]) -> str:
    """
    Format records as a column table.

    Args:
        records: Decoded records

    Returns:
        Table string
    """
    if not records:
        return "No records"

    rows = [
        [format_value(getattr(record, attr)) for attr, _ in _RECORD_COLUMNS]
        for record in records
    ]

    # Column widths
    widths = [len(title) for _, title in _RECORD_COLUMNS]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    lines = []

    # Header row
    lines.append("  ".join(
        title.ljust(widths[i]) for i, (_, title) in enumerate(_RECORD_COLUMNS)
    ).rstrip())

    # Separator
    lines.append("  ".join("-" * w for w in widths))

    # Data rows
    for row in rows:
        lines.append("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip())

    return "\n".join(lines)


def render_text(result: Renderable) -> str:
    """
    Render a decoded response for humans.

    Includes the sub-code bit breakdown, which JSON output leaves out.

    Args:
        result: OperationResult, RecordListResult, or None for an empty response

    Returns:
        Multi-line text
    """
    if result is None:
        return f"{NO_RESPONSE_ERROR}."

    listing = result if isinstance(result, RecordListResult) else None
    op_result = listing.result if listing else result

    lines = ["=== API Result ==="]
    lines.append(f"Result Code: {op_result.code} - {op_result.message}")

    if op_result.text is not None:
        lines.append(f"Result Text: {op_result.text}")

    if op_result.sub_code > 0:
        lines.append(f"Additional error details (sub-code {op_result.sub_code}):")
        for detail in op_result.sub_code_details:
            lines.append(f"  - {detail}")

    lines.append("==================")

    if listing is not None and listing.success:
        lines.append("")
        lines.append(format_record_table(listing.records))
        if listing.item_count is not None:
            lines.append("")
            lines.append(f"Record Count: {listing.item_count}")

    return "\n".join(lines)


# =============================================================================
# XML
# =============================================================================

def render_xml(raw_xml: Optional[str]) -> str:
    """
    Show the raw response body.

    Well-formed bodies are pretty-printed; anything else is returned verbatim.

    Args:
        raw_xml: Response body

    Returns:
        XML text
    """
    if not raw_xml:
        return "No XML data available"

    try:
        root = etree.fromstring(raw_xml.encode("utf-8"), _display_parser)
    except etree.XMLSyntaxError:
        return raw_xml

    return etree.tostring(root, pretty_print=True, encoding="unicode").rstrip("\n")


# =============================================================================
# Messages
# =============================================================================

def format_output(result: Renderable, format: str = "json") -> str:
    """
    Format decoded response for output.

    Args:
        result: Decoded response
        format: Output format - json, text, xml

    Returns:
        Formatted string
    """
    if format == "xml":
        op_result = result.result if isinstance(result, RecordListResult) else result
        return render_xml(op_result.raw_xml if op_result else None)

    if format == "text":
        return render_text(result)

    return render_json(result)


def print_success(message: str) -> None:
    """Print success message to stderr."""
    print(f"SUCCESS: {message}", file=sys.stderr)


def print_error(message: str) -> None:
    """Print error message to stderr."""
    print(f"ERROR: {message}", file=sys.stderr)


def print_info(message: str) -> None:
    """Print info message to stderr."""
    print(f"INFO: {message}", file=sys.stderr)


class OutputFormatter:
    """
    Writes decoded responses in the selected format.
    """

    def __init__(self, format: str = "json", quiet: bool = False):
        """
        Initialize formatter.

        Args:
            format: Output format (json, text, xml)
            quiet: Suppress non-essential output
        """
        self.format = format
        self.quiet = quiet

    def output(self, result: Renderable) -> None:
        """
        Output formatted response.

        Args:
            result: Decoded response, None for an empty body
        """
        print(format_output(result, self.format))

    def success(self, message: str) -> None:
        """Print success message."""
        if not self.quiet:
            print_success(message)

    def error(self, message: str) -> None:
        """Print error message."""
        print_error(message)

    def info(self, message: str) -> None:
        """Print info message."""
        if not self.quiet:
            print_info(message)

"""
DNS API XML Parser

Decodes DNS API SOAP responses.

The service does not always return strictly well-formed XML, so responses are
read with a plain substring scanner instead of an XML parser. Every lookup is
independent: a missing or unclosed tag yields None and decoding carries on.
"""

import logging
import re
from typing import List, Optional

from diginet_dns.models import (
    UNKNOWN_RESULT_CODE,
    DNSRecord,
    OperationResult,
    RecordListResult,
)

logger = logging.getLogger("diginet.parser")

RESULT_ITEMS_TAG = "resultItems"
RECORD_ITEM_TAG = "DNSRecordListItem"

# Optional sign and ASCII digits only
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def extract_value(xml: Optional[str], tag: str) -> Optional[str]:
    """
    Get text between the first <tag> and the next </tag>.

    The text is returned verbatim: no trimming, no entity decoding.

    Args:
        xml: Raw response text
        tag: Element name without brackets

    Returns:
        Inner text, or None if the tag is missing or never closed
    """
    if xml is None:
        return None

    open_tag = f"<{tag}>"
    start = xml.find(open_tag)
    if start < 0:
        return None

    start += len(open_tag)
    end = xml.find(f"</{tag}>", start)
    if end < 0:
        return None

    return xml[start:end]


def _parse_int(text: Optional[str], default: Optional[int] = None) -> Optional[int]:
    """Parse integer text, ignoring surrounding whitespace."""
    if text is None:
        return default
    text = text.strip()
    if not _INT_PATTERN.fullmatch(text):
        logger.debug(f"Ignoring non-numeric value: {text!r}")
        return default
    return int(text)


def _parse_flag(text: Optional[str]) -> Optional[bool]:
    """Only the exact literal 'true' is true. Absent stays None."""
    if text is None:
        return None
    return text == "true"


def _iter_blocks(xml: str, tag: str, start: int, end: int):
    """
    Yield inner text of successive <tag>...</tag> blocks inside xml[start:end].

    Stops at the first block that does not open and close before end.
    """
    open_tag = f"<{tag}>"
    close_tag = f"</{tag}>"

    pos = start
    while pos < end:
        block_start = xml.find(open_tag, pos, end)
        if block_start < 0:
            break

        inner_start = block_start + len(open_tag)
        block_end = xml.find(close_tag, inner_start)
        if block_end < 0 or block_end >= end:
            logger.debug(f"Unterminated <{tag}> at offset {block_start}, stopping")
            break

        yield xml[inner_start:block_end]
        pos = block_end + len(close_tag)


class XMLParser:
    """
    Parses DNS API responses.

    All methods are static and return structured response objects, or None
    when there is no response body at all.
    """

    @staticmethod
    def parse_result(xml_data: Optional[str]) -> Optional[OperationResult]:
        """
        Parse the result fields shared by every operation.

        Args:
            xml_data: Raw response text

        Returns:
            OperationResult, or None if the body is empty
        """
        if not xml_data:
            return None

        code = _parse_int(extract_value(xml_data, "resultCode"))
        sub_code = _parse_int(extract_value(xml_data, "resultSubCode"), 0)
        text = extract_value(xml_data, "resultText")

        if code is None:
            logger.warning("Response has no usable resultCode")
            code = UNKNOWN_RESULT_CODE

        return OperationResult(
            code=code,
            sub_code=sub_code,
            text=text,
            raw_xml=xml_data,
        )

    @staticmethod
    def parse_record(xml_data: str) -> DNSRecord:
        """Parse the body of one DNSRecordListItem."""
        return DNSRecord(
            domain=extract_value(xml_data, "DomainName"),
            host=extract_value(xml_data, "HostName"),
            record_type=extract_value(xml_data, "RecordType"),
            data=extract_value(xml_data, "Data"),
            ttl=_parse_int(extract_value(xml_data, "TTL")),
            priority=_parse_int(extract_value(xml_data, "Priority")),
            read_only=_parse_flag(extract_value(xml_data, "ReadOnly")),
            suspended=_parse_flag(extract_value(xml_data, "Suspended")),
            suspension_reason=extract_value(xml_data, "SuspensionReason"),
        )

    @staticmethod
    def parse_record_list(xml_data: Optional[str]) -> Optional[RecordListResult]:
        """
        Parse recordGetList response.

        Records are only read when the result code is 0. Blocks are taken
        from the <resultItems> section in document order; a truncated block
        ends the scan and the records decoded so far are kept.

        Args:
            xml_data: Raw response text

        Returns:
            RecordListResult, or None if the body is empty
        """
        result = XMLParser.parse_result(xml_data)
        if result is None:
            return None

        if not result.success:
            return RecordListResult(result=result)

        records: List[DNSRecord] = []

        items_open = f"<{RESULT_ITEMS_TAG}>"
        items_start = xml_data.find(items_open)
        items_end = xml_data.find(f"</{RESULT_ITEMS_TAG}>")
        if items_start >= 0 and items_end >= 0:
            for block in _iter_blocks(
                xml_data, RECORD_ITEM_TAG, items_start + len(items_open), items_end
            ):
                records.append(XMLParser.parse_record(block))

        item_count = _parse_int(extract_value(xml_data, "resultItemCount"))

        logger.debug(f"Decoded {len(records)} record(s), reported count {item_count}")

        return RecordListResult(
            result=result,
            records=records,
            item_count=item_count,
        )

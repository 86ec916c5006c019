"""
DNS API Client

High-level client for QuickServiceBox DNS record management.
"""

import logging
from typing import Optional, Union

from diginet_dns.models import (
    DNSRecord,
    Operation,
    OperationRequest,
    OperationResult,
    RecordListResult,
)
from diginet_dns.transport import HTTPTransport
from diginet_dns.xml_builder import API_ENDPOINT, XMLBuilder, soap_action
from diginet_dns.xml_parser import XMLParser

logger = logging.getLogger("diginet.client")


class DNSAPIClient:
    """
    High-level DNS API client.

    Every call is one stateless request/response cycle: the envelope is
    built, sent once, and the response decoded. Result codes reported by the
    service (including failures) are returned as data; only transport
    problems raise.

    Example:
        with DNSAPIClient() as client:
            result = client.record_add(
                "user",
                "cGFzc3dvcmQ=",
                DNSRecord(domain="example.com", host="www", record_type="A",
                          data="192.0.2.10", ttl=3600, priority=0),
            )
            print(result.code, result.message)
    """

    def __init__(
        self,
        endpoint: str = API_ENDPOINT,
        timeout: int = 30,
        verify: bool = True,
        transport: HTTPTransport = None,
    ):
        """
        Initialize DNS API client.

        Args:
            endpoint: DNS API URL
            timeout: Request timeout in seconds
            verify: Whether to verify the server certificate
            transport: Pre-built transport (endpoint/timeout/verify are ignored)
        """
        self._transport = transport or HTTPTransport(
            endpoint=endpoint,
            timeout=timeout,
            verify=verify,
        )

    @property
    def endpoint(self) -> str:
        return self._transport.endpoint

    def close(self) -> None:
        """Release the transport."""
        self._transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _call(self, request: OperationRequest) -> Optional[str]:
        """
        Build and send a request.

        Raises:
            DNSAPITransportError: If the HTTP request fails
        """
        envelope = XMLBuilder.build(request)
        logger.debug(f"Calling {request.operation.value} as {request.username}")
        return self._transport.send(soap_action(request.operation), envelope)

    def execute(
        self, request: OperationRequest
    ) -> Union[OperationResult, RecordListResult, None]:
        """
        Execute any operation request.

        Args:
            request: Operation request

        Returns:
            RecordListResult for listings, OperationResult otherwise.
            None if the service returned an empty body.

        Raises:
            DNSAPITransportError: If the HTTP request fails
        """
        response_xml = self._call(request)

        if request.operation == Operation.LIST:
            decoded = XMLParser.parse_record_list(response_xml)
            result = decoded.result if decoded else None
        else:
            decoded = XMLParser.parse_result(response_xml)
            result = decoded

        if result is None:
            logger.warning(f"{request.operation.value}: empty response body")
        else:
            logger.info(f"{request.operation.value}: [{result.code}] {result.message}")

        return decoded

    # =========================================================================
    # Record Commands
    # =========================================================================

    def record_add(
        self, username: str, password_b64: str, record: DNSRecord
    ) -> Optional[OperationResult]:
        """
        Add a DNS record.

        Args:
            username: Account username
            password_b64: Base64 encoded account password
            record: Record to add

        Returns:
            Decoded result, or None for an empty response

        Raises:
            DNSAPITransportError: If the HTTP request fails
        """
        return self.execute(OperationRequest.add(username, password_b64, record))

    def record_update(
        self,
        username: str,
        password_b64: str,
        old_record: DNSRecord,
        new_record: DNSRecord,
    ) -> Optional[OperationResult]:
        """
        Replace an existing DNS record.

        Args:
            username: Account username
            password_b64: Base64 encoded account password
            old_record: Record as it currently exists
            new_record: Replacement values

        Returns:
            Decoded result, or None for an empty response

        Raises:
            DNSAPITransportError: If the HTTP request fails
        """
        return self.execute(
            OperationRequest.update(username, password_b64, old_record, new_record)
        )

    def record_delete(
        self, username: str, password_b64: str, record: DNSRecord
    ) -> Optional[OperationResult]:
        """
        Delete a DNS record.

        Returns:
            Decoded result, or None for an empty response

        Raises:
            DNSAPITransportError: If the HTTP request fails
        """
        return self.execute(OperationRequest.delete(username, password_b64, record))

    def record_list(
        self, username: str, password_b64: str, domain: str
    ) -> Optional[RecordListResult]:
        """
        List DNS records of a domain.

        Args:
            username: Account username
            password_b64: Base64 encoded account password
            domain: Domain name

        Returns:
            Decoded listing, or None for an empty response

        Raises:
            DNSAPITransportError: If the HTTP request fails
        """
        return self.execute(OperationRequest.list_records(username, password_b64, domain))

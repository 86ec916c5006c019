"""
DNS API Transport

Sends SOAP envelopes to the DNS API over HTTPS.
"""

import logging
from typing import Optional

import requests

from diginet_dns import __version__
from diginet_dns.exceptions import DNSAPITransportError
from diginet_dns.xml_builder import API_ENDPOINT, CONTENT_TYPE

logger = logging.getLogger("diginet.transport")


class HTTPTransport:
    """
    HTTPS transport for the DNS API.

    Handles:
    - One POST per call, no retries
    - TLS verification (on by default)
    - Mapping network and HTTP status failures to DNSAPITransportError

    The response body only lives for the duration of send().
    """

    def __init__(
        self,
        endpoint: str = API_ENDPOINT,
        timeout: int = 30,
        verify: bool = True,
    ):
        """
        Initialize transport.

        Args:
            endpoint: DNS API URL
            timeout: Request timeout in seconds
            verify: Whether to verify the server certificate
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.verify = verify

        session = requests.Session()
        session.headers.update(
            {
                "Content-Type": CONTENT_TYPE,
                "User-Agent": f"diginet-dns/{__version__}",
            }
        )
        self._session = session

    def send(self, soap_action: str, envelope: str) -> Optional[str]:
        """
        POST an envelope and return the response body.

        Args:
            soap_action: Exact SOAPAction header value
            envelope: SOAP envelope text

        Returns:
            Response body text, or None if the body is empty

        Raises:
            DNSAPITransportError: On connection, TLS, timeout or HTTP status failure
        """
        logger.debug(f"POST {self.endpoint} (SOAPAction: {soap_action})")

        try:
            response = self._session.post(
                self.endpoint,
                data=envelope.encode("utf-8"),
                headers={"SOAPAction": soap_action},
                timeout=self.timeout,
                verify=self.verify,
            )
        except requests.exceptions.SSLError as e:
            raise DNSAPITransportError(f"TLS error: {e}")
        except requests.exceptions.Timeout:
            raise DNSAPITransportError(f"Request timed out after {self.timeout}s")
        except requests.exceptions.ConnectionError as e:
            raise DNSAPITransportError(f"Connection error: {e}")
        except requests.exceptions.RequestException as e:
            raise DNSAPITransportError(f"Request failed: {e}")

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError:
            raise DNSAPITransportError(
                f"Server returned {response.reason or 'an error'}",
                status_code=response.status_code,
            )

        logger.debug(f"Received {len(response.content)} bytes (HTTP {response.status_code})")

        if not response.content:
            return None

        # The service declares utf-8 but may omit the charset parameter
        return response.content.decode("utf-8", errors="replace")

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

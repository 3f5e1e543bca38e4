"""HTTP exchange for the blocking (requests) and awaitable (httpx) surfaces."""
import json
import logging
from typing import Any, Dict, Optional

import httpx
import requests

from .credentials import Credentials, CredentialsAuth
from .errors import NotFoundError, ServiceError, TransportError, ValidationError
from .request_builder import ApiRequest

logger = logging.getLogger(__name__)

USER_AGENT = "helpdesk-client/0.1.0"


class Transport:
    """
    Sends ApiRequest values and maps the outcome to a decoded body or an error.

    Both send() and send_async() use the same headers, the same auth hook and
    the same response handling, so the two surfaces only differ in the HTTP
    library doing I/O. Nothing is retried.
    """

    VALIDATION_STATUSES = (400, 422)

    def __init__(
        self,
        credentials: Credentials,
        timeout: float = 60,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize transport

        Args:
            credentials: Site and secret, validated before every call
            timeout: Per-request timeout in seconds
            session: Optional pre-configured requests session
        """
        self.credentials = credentials
        self.timeout = timeout
        self.auth = CredentialsAuth(credentials)

        # Create session with auth
        self.session = session or requests.Session()
        self.session.auth = self.auth

    def close(self) -> None:
        self.session.close()

    def _headers(self, request: ApiRequest) -> Dict[str, str]:
        """Headers for a request. Raises ConfigurationError on bad credentials."""
        self.credentials.validate()
        headers = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        if request.body is not None:
            headers["Content-Type"] = "application/json"
        return headers

    def send(self, request: ApiRequest) -> Dict[str, Any]:
        """
        Perform the request, blocking until the response arrives.

        Returns:
            Decoded JSON body ({} for an empty 2xx body)

        Raises:
            ConfigurationError: Credentials unusable, nothing was sent
            TransportError: No response was received
            ServiceError: Non-2xx status (NotFoundError / ValidationError subclasses),
                or a 2xx body that is not the expected JSON object
        """
        headers = self._headers(request)
        logger.debug(f"{request.method} {request.url} params={request.query}")

        try:
            response = self.session.request(
                request.method,
                request.url,
                params=list(request.params),
                data=request.body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"{request.method} {request.url} did not complete: {e}")
            raise TransportError(str(e), request.method, request.url) from e

        return self._handle_response(request, response.status_code, response.content)

    async def send_async(self, request: ApiRequest) -> Dict[str, Any]:
        """
        Awaitable counterpart of send().

        Cancellation of the calling task propagates as asyncio.CancelledError
        and is never converted into TransportError.
        """
        headers = self._headers(request)
        logger.debug(f"{request.method} {request.url} params={request.query} (async)")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, auth=self.auth) as client:
                response = await client.request(
                    request.method,
                    request.url,
                    params=list(request.params),
                    content=request.body,
                    headers=headers,
                )
        except httpx.TransportError as e:
            logger.warning(f"{request.method} {request.url} did not complete: {e}")
            raise TransportError(str(e), request.method, request.url) from e

        return self._handle_response(request, response.status_code, response.content)

    def _handle_response(self, request: ApiRequest, status_code: int, content: Optional[bytes]) -> Dict[str, Any]:
        """Decode a response body or raise the matching ServiceError."""
        text = content.decode("utf-8", errors="replace") if content else ""

        payload = None
        decode_error = None
        if text.strip():
            try:
                payload = json.loads(text)
            except json.JSONDecodeError as e:
                decode_error = e

        if 200 <= status_code < 300:
            if decode_error is not None:
                logger.warning(f"Invalid JSON from {request.method} {request.url}: {decode_error}")
                raise ServiceError(status_code, None, text, request.method, request.url)
            if not text.strip():
                payload = {}
            if not isinstance(payload, dict):
                logger.warning(f"Expected a JSON object from {request.method} {request.url}")
                raise ServiceError(status_code, None, text, request.method, request.url)
            if request.envelope is not None and payload.get(request.envelope) is None:
                logger.warning(f"Response to {request.method} {request.url} has no '{request.envelope}'")
                raise ServiceError(status_code, payload, text, request.method, request.url)
            return payload

        if status_code == 404:
            error_class = NotFoundError
        elif status_code in self.VALIDATION_STATUSES:
            error_class = ValidationError
        else:
            error_class = ServiceError

        logger.warning(f"{request.method} {request.url} returned HTTP {status_code}")
        raise error_class(
            status_code,
            payload if isinstance(payload, dict) else None,
            text,
            request.method,
            request.url,
        )

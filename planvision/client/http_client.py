"""
Async HTTP client shared by the client services.
"""
import logging
from typing import Any, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from planvision.client.config import BASE_URL
from planvision.client.endpoints import Endpoint
from planvision.client.errors import DecodingError, InvalidURLError, UnauthorizedError, UnknownNetworkError
from planvision.client.signals import UnauthorizedSignal

logger = logging.getLogger(__name__)

UPLOAD_FILENAME = "upload.jpg"
UPLOAD_CONTENT_TYPE = "image/jpeg"


class HTTPClient:
    """
    Sends ``Endpoint`` requests and decodes responses into pydantic types.

    Status handling:
        2xx: body decoded into ``response_model`` (DecodingError on mismatch)
        401: the unauthorized signal is emitted, then UnauthorizedError
        other: UnknownNetworkError, also raised for transport failures
    """

    def __init__(
        self,
        token_store,
        unauthorized: UnauthorizedSignal,
        base_url: str = BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token_store = token_store
        self.unauthorized = unauthorized
        self.base_url = base_url
        self.transport = transport

    def _headers(self, endpoint: Endpoint) -> dict:
        headers = dict(endpoint.headers or {})
        if endpoint.authenticated:
            token = self.token_store.get_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    async def send_request(self, endpoint: Endpoint, response_model: Any) -> Any:
        headers = self._headers(endpoint)
        request_kwargs = {"params": endpoint.query, "headers": headers}
        if endpoint.upload is not None:
            request_kwargs["files"] = {"file": (UPLOAD_FILENAME, endpoint.upload, UPLOAD_CONTENT_TYPE)}
            logger.info(f"[REQUEST] {endpoint.method} {endpoint.path} [multipart {len(endpoint.upload)} bytes]")
        else:
            if endpoint.body is not None:
                request_kwargs["json"] = endpoint.body
            logger.info(f"[REQUEST] {endpoint.method} {endpoint.path} body={endpoint.body}")

        try:
            async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport) as client:
                response = await client.request(endpoint.method, endpoint.path, **request_kwargs)
        except httpx.InvalidURL as e:
            logger.error(f"[ERROR] Invalid URL for {endpoint.path}: {e}")
            raise InvalidURLError(str(e)) from e
        except httpx.HTTPError as e:
            logger.error(f"[ERROR] System Error: {e}")
            raise UnknownNetworkError(str(e)) from e

        logger.info(f"[RESPONSE] {endpoint.path} {response.status_code}")
        logger.debug(f"[RESPONSE] body: {response.text}")

        if 200 <= response.status_code < 300:
            try:
                return TypeAdapter(response_model).validate_json(response.content or b"{}")
            except ValidationError as e:
                logger.error(f"[ERROR] Decoding failed: {e}")
                raise DecodingError(str(e)) from e

        if response.status_code == 401:
            self.unauthorized.emit()
            raise UnauthorizedError(f"401 from {endpoint.path}")

        raise UnknownNetworkError(f"{response.status_code} from {endpoint.path}", status_code=response.status_code)

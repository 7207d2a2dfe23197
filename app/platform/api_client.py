"""
The only place that talks HTTP to the marketplace backend.

Every call goes through ``ApiClient.request``. Failures come out as a single
``ApiError`` whose ``message`` is safe to show to the user; ``kind`` says
which of the three failure classes happened for callers that care.
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from app.platform.config import settings
from app.platform.logger import get_logger
from app.platform.session import SessionStore

logger = get_logger("api_client")

GENERIC_ERROR_MESSAGE = "Something went wrong"
NO_RESPONSE_MESSAGE = "No response received from server"
SETUP_ERROR_MESSAGE = "Error setting up the request"

UNAUTHORIZED_STATUSES = {401, 403}

M = TypeVar("M", bound=BaseModel)


class ErrorKind(str, Enum):
    RESPONSE = "response"
    NO_RESPONSE = "no_response"
    SETUP = "setup"


class ApiError(Exception):
    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.payload = payload


class SessionExpiredError(ApiError):
    """The backend rejected the token we sent; the session has been cleared."""


def extract_error_message(payload: Any) -> str:
    if isinstance(payload, dict):
        for key in ("message", "error", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return GENERIC_ERROR_MESSAGE


class ApiClient:
    def __init__(
        self,
        session: SessionStore,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session
        self.base_url = base_url or settings.API_BASE_URL
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT
        self.transport = transport

    def _headers(self, authenticated: bool = True) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.session.token
        if authenticated and token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def get(self, path: str, params: Optional[dict] = None, authenticated: bool = True) -> Any:
        return await self.request("GET", path, params=params, authenticated=authenticated)

    async def post(
        self,
        path: str,
        json: Any = None,
        files: Optional[dict] = None,
        data: Optional[dict] = None,
        authenticated: bool = True,
    ) -> Any:
        return await self.request(
            "POST", path, json=json, files=files, data=data, authenticated=authenticated
        )

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
        files: Optional[dict] = None,
        data: Optional[dict] = None,
        authenticated: bool = True,
    ) -> Any:
        """
        Send one request and return the decoded body.

        ``files`` switches the body to multipart/form-data (with ``data`` as
        the plain form fields); otherwise ``json`` is sent as JSON.
        ``authenticated=False`` leaves the session token off the request, so a
        401 on it is an ordinary error and never ends the session.
        """
        try:
            client = httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            logger.error(f"Could not create a client for {self.base_url}: {e}")
            raise ApiError(SETUP_ERROR_MESSAGE, ErrorKind.SETUP) from e

        async with client:
            try:
                request = client.build_request(
                    method,
                    path,
                    params=params,
                    json=json if files is None else None,
                    files=files,
                    data=data if files is not None else None,
                    headers=self._headers(authenticated),
                )
            except (httpx.InvalidURL, TypeError, ValueError) as e:
                logger.error(f"Could not build {method} {path}: {e}")
                raise ApiError(SETUP_ERROR_MESSAGE, ErrorKind.SETUP) from e

            try:
                response = await client.send(request)
            except httpx.UnsupportedProtocol as e:
                logger.error(f"Could not send {method} {path}: {e}")
                raise ApiError(SETUP_ERROR_MESSAGE, ErrorKind.SETUP) from e
            except httpx.TransportError as e:
                logger.error(f"No response for {method} {path}: {e!r}")
                raise ApiError(NO_RESPONSE_MESSAGE, ErrorKind.NO_RESPONSE) from e

        return self._handle_response(request, response)

    def _handle_response(self, request: httpx.Request, response: httpx.Response) -> Any:
        payload = self._decode(response)

        if response.is_success:
            return payload

        message = extract_error_message(payload)
        logger.warning(
            f"{request.method} {request.url.path} failed with {response.status_code}: {message}"
        )

        if response.status_code in UNAUTHORIZED_STATUSES and "Authorization" in request.headers:
            self.session.clear()
            logger.info("Backend rejected the session token; session cleared")
            raise SessionExpiredError(
                message, ErrorKind.RESPONSE, response.status_code, payload
            )

        raise ApiError(message, ErrorKind.RESPONSE, response.status_code, payload)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}


def parse_response(model: Type[M], payload: Any) -> M:
    """Validate a backend body; a body we cannot read is reported like a failed call."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        # locations only, values may hold tokens or personal data
        logger.error(
            f"Unexpected {model.__name__} body from backend, bad fields: {[err['loc'] for err in e.errors()]}"
        )
        raise ApiError(GENERIC_ERROR_MESSAGE, ErrorKind.RESPONSE, payload=payload) from e


def parse_list(model: Type[M], items: Any) -> List[M]:
    return [parse_response(model, item) for item in items or []]

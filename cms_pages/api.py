r"""Thin client for the content REST API.

This module wraps the two read operations the repository needs: fetching a
single record and fetching a page of records. It centralises the base URL,
timeouts, retries for transient server errors, and translation of HTTP
failures into :class:`ApiError` subclasses. It does not know about content
types or schemas; it returns decoded JSON.

Example
-------
>>> from cms_pages.api import RestApiClient
>>> client = RestApiClient("https://cms.example.invalid/api")  # doctest: +SKIP
>>> client.get_one("news", 42)["title"]  # doctest: +SKIP
'Hello world'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ
from http import HTTPStatus
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

_ACCEPT_HEADER = "application/json"


class ApiError(RuntimeError):
    """Base class for content API failures."""


class FailedRequestError(ApiError):
    """Raised when the API cannot be reached or returns an unusable response."""


class NotFoundError(ApiError):
    """Raised when the requested record or endpoint does not exist."""


class ApiPermissionError(ApiError):
    """Raised when the API rejects the request as unauthorised."""


@dc.dataclass(slots=True)
class ListResponse:
    """Decoded list endpoint payload.

    Attributes
    ----------
    data : list[dict[str, Any]]
        Raw records, in API order.
    pagination : dict[str, Any]
        The ``pagination`` block when present, otherwise the paging keys
        found in ``metadata``.
    metadata : dict[str, Any]
        The ``metadata`` block as returned by the API.
    """

    data: list[dict[str, typ.Any]]
    pagination: dict[str, typ.Any] = dc.field(default_factory=dict)
    metadata: dict[str, typ.Any] = dc.field(default_factory=dict)


class RestApiClient:
    """Read records from a JSON REST API."""

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialise the client with a base URL and optional transport.

        Parameters
        ----------
        base_url : str
            API root; endpoint names are appended to it.
        session : requests.Session, optional
            Preconfigured session, e.g. for replaying recorded responses in
            tests. Defaults to a session that retries idempotent requests on
            5xx responses.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``10.0``.
        """
        self.base_url = base_url.rstrip("/")
        self._session = session or _build_session()
        self.timeout = timeout
        self._headers = {"Accept": _ACCEPT_HEADER, "User-Agent": "cms-pages/0.1"}

    def get_one(self, endpoint: str, record_id: object) -> dict[str, typ.Any]:
        """Return the decoded record ``record_id`` from ``endpoint``.

        ``record_id`` is percent-encoded as a single path segment, so ids
        containing ``/`` or ``?`` cannot change the request path.
        """
        path = f"{endpoint.strip('/')}/{quote(str(record_id), safe='')}"
        payload = self._get(path)
        if not isinstance(payload, dict):
            msg = f"Expected a JSON object from '{endpoint}/{record_id}'"
            raise FailedRequestError(msg)
        return payload

    def list(
        self,
        endpoint: str,
        page: int = 1,
        options: cabc.Mapping[str, typ.Any] | None = None,
    ) -> ListResponse:
        """Return one page of records from ``endpoint``.

        Parameters
        ----------
        endpoint : str
            Endpoint path relative to the base URL.
        page : int, optional
            Page number, starting at 1.
        options : Mapping[str, Any], optional
            Extra query parameters passed through to the API.
        """
        params: dict[str, typ.Any] = {"page": page}
        if options:
            params.update(options)
        payload = self._get(endpoint.strip("/"), params=params)
        if not isinstance(payload, dict):
            msg = f"Expected a JSON object from '{endpoint}'"
            raise FailedRequestError(msg)

        data = payload.get("data")
        if not isinstance(data, list):
            msg = f"List response from '{endpoint}' has no 'data' array"
            raise FailedRequestError(msg)
        metadata = payload.get("metadata")
        if not isinstance(metadata, dict):
            metadata = {}
        pagination = payload.get("pagination")
        if not isinstance(pagination, dict):
            pagination = metadata
        return ListResponse(
            data=[row for row in data if isinstance(row, dict)],
            pagination=dict(pagination),
            metadata=dict(metadata),
        )

    def _get(
        self, path: str, params: cabc.Mapping[str, typ.Any] | None = None
    ) -> typ.Any:
        url = f"{self.base_url}/{path}"
        logger.debug("GET %s (%s)", url, format_params(params or {}))
        try:
            response = self._session.get(
                url, params=params, headers=self._headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            msg = f"Failed to reach '{url}': {exc}"
            raise FailedRequestError(msg) from exc

        status = response.status_code
        if status == HTTPStatus.NOT_FOUND:
            msg = f"Resource not found: {url}"
            raise NotFoundError(msg)
        if status in (HTTPStatus.UNAUTHORIZED, HTTPStatus.FORBIDDEN):
            msg = f"Permission denied for '{url}' (status {status})"
            raise ApiPermissionError(msg)
        if status >= HTTPStatus.BAD_REQUEST:
            snippet = response.text[:200]
            logger.warning("Request to %s failed with status %s", url, status)
            msg = f"Request to '{url}' failed with status {status}: {snippet}"
            raise FailedRequestError(msg)

        try:
            return response.json()
        except ValueError as exc:
            msg = f"Response from '{url}' was not valid JSON"
            raise FailedRequestError(msg) from exc


def format_params(params: cabc.Mapping[str, typ.Any]) -> str:
    """Render request parameters as ``key=value`` pairs for log messages.

    Booleans render as ``1``/``0`` so the output matches what is sent on the
    query string.

    Examples
    --------
    >>> format_params({"one": 100, "two": 200, "http_errors": False})
    'one=100, two=200, http_errors=0'
    """
    parts: list[str] = []
    for key, value in params.items():
        if isinstance(value, bool):
            value = int(value)
        elif isinstance(value, cabc.Mapping):
            value = f"[{format_params(value)}]"
        parts.append(f"{key}={value}")
    return ", ".join(parts)


def _build_session() -> requests.Session:
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


__all__ = [
    "ApiError",
    "ApiPermissionError",
    "FailedRequestError",
    "ListResponse",
    "NotFoundError",
    "RestApiClient",
    "format_params",
]

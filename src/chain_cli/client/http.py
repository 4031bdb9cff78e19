"""Backend HTTP client."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Any, Protocol

import httpx

from chain_cli.client.auth import resolve_auth
from chain_cli.client.errors import (
    AggregatedError,
    AuthenticationError,
    BackendAPIError,
    ConflictError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from chain_cli.config.constants import DEFAULT_MAX_RETRIES
from chain_cli.config.models import BackendProfile

logger = logging.getLogger(__name__)


class Closeable(Protocol):
    def close(self) -> None: ...


@contextmanager
def released(handle: Closeable) -> Iterator[Closeable]:
    """Scope *handle* so it is closed on every exit path.

    When the body fails and closing fails too, both errors are raised together
    as an :class:`AggregatedError` with the body's error first. A close failure
    on the success path is raised on its own as a :class:`TransportError`.
    """
    try:
        yield handle
    except Exception as exc:
        try:
            handle.close()
        except Exception as close_exc:
            logger.warning("Failed to release response: %s", close_exc)
            raise AggregatedError(exc, close_exc) from exc
        raise
    try:
        handle.close()
    except Exception as exc:
        raise TransportError(f"Failed to release response: {exc}") from exc


def error_detail(response: httpx.Response) -> str:
    """Extract a readable message from an error response body.

    Understands JSON:API ``{"errors": [{"detail": ...}]}`` documents and plain
    ``{"message": ...}`` objects, falling back to the raw text.
    """
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list):
            details = [
                str(e.get("detail") or e.get("title") or e)
                if isinstance(e, dict) else str(e)
                for e in errors
            ]
            if details:
                return "; ".join(details)
        if "message" in body:
            return str(body["message"])
    return response.text


class BackendClient:
    """Synchronous HTTP client for the node's JSON API."""

    def __init__(
        self,
        profile: BackendProfile,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.profile = profile
        self.base_url = profile.url
        auth = resolve_auth(profile)
        if not profile.verify_ssl:
            logger.warning("TLS certificate verification is disabled")
        self._client = httpx.Client(
            base_url=self.base_url,
            auth=auth,
            verify=profile.verify_ssl,
            timeout=profile.timeout,
            transport=transport or httpx.HTTPTransport(retries=DEFAULT_MAX_RETRIES),
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> BackendClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        if response.is_success:
            return response
        status = response.status_code
        detail = error_detail(response)
        if status in (401, 403):
            raise AuthenticationError(
                f"Authentication failed. Check your API token. ({detail})"
            )
        if status == 404:
            raise NotFoundError(f"Not found: {detail}")
        if status == 409:
            raise ConflictError(f"Conflict: {detail}")
        if status == 422:
            raise ValidationError(detail)
        raise BackendAPIError(status, detail)

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            request = self._client.build_request(method, path, **kwargs)
            logger.debug("%s %s", method, request.url)
            response = self._client.send(request, stream=True)
        except httpx.ConnectError as exc:
            raise TransportError(
                f"Cannot connect to backend at {self.profile.url}: {exc}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Request to {self.profile.url} timed out: {exc}"
            ) from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise TransportError(
                f"Invalid URL for backend at {self.profile.url}: {exc}"
            ) from exc
        except httpx.TransportError as exc:
            raise TransportError(
                f"Request to {self.profile.url} failed: {exc}"
            ) from exc
        logger.debug("%s %s -> %d", method, request.url, response.status_code)
        return response

    @contextmanager
    def open(self, method: str, path: str, **kwargs: Any) -> Iterator[httpx.Response]:
        """Send a request and yield its response for the duration of the block.

        The body is read and error statuses are mapped to typed errors before
        the response is yielded. The response is released on every path; see
        :func:`released` for how a failed release is reported.
        """
        response = self._send(method, path, **kwargs)
        with released(response):
            try:
                response.read()
            except httpx.TransportError as exc:
                raise TransportError(
                    f"Reading response from {self.profile.url} failed: {exc}"
                ) from exc
            self._handle_response(response)
            yield response

    def get(self, path: str, **kwargs: Any) -> AbstractContextManager[httpx.Response]:
        return self.open("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> AbstractContextManager[httpx.Response]:
        return self.open("POST", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> AbstractContextManager[httpx.Response]:
        return self.open("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> AbstractContextManager[httpx.Response]:
        return self.open("DELETE", path, **kwargs)

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Any, Iterable, Tuple

import httpx
from loguru import logger

from .errors import NotFoundError, TreeApiError, ValidationError
from .inputs import validate_name
from .snapshot import TreeSnapshot, parse_snapshot

DEFAULT_BASE_URL = "http://localhost:8080/api/trees"
DEFAULT_TIMEOUT = 10.0
DEFAULT_PAGE_SIZE = 5


@dataclass(slots=True, frozen=True)
class ApiSettings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> ApiSettings:
        base_url = os.environ.get("BSTVIZ_API_BASE_URL") or DEFAULT_BASE_URL
        raw_timeout = os.environ.get("BSTVIZ_API_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError:
            logger.warning("Ignoring invalid BSTVIZ_API_TIMEOUT={!r}", raw_timeout)
            timeout = DEFAULT_TIMEOUT
        return cls(base_url=base_url, timeout=timeout)


@dataclass(slots=True, frozen=True)
class TreePage:
    """One page of the tree listing."""

    trees: Tuple[TreeSnapshot, ...]
    total_count: int
    size: int
    page: int = 0

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 1
        return max(math.ceil(self.total_count / self.size), 1)

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages - 1


def _error_message(response: httpx.Response | None, fallback: str) -> str:
    if response is None:
        return fallback
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase or fallback


class TreeApiClient:
    """Synchronous client for the tree service REST endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = ApiSettings.from_env()
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self._client = httpx.Client(
            timeout=timeout if timeout is not None else settings.timeout,
            transport=transport,
        )

    def __enter__(self) -> TreeApiClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(
        self, method: str, url: str, *, failure: str, **kwargs: Any
    ) -> httpx.Response:
        logger.debug("{} {}", method, url)
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            raise TreeApiError(str(exc) or failure) from exc

        if response.is_success:
            return response
        message = _error_message(response, failure)
        logger.debug("{} {} -> {} {}", method, url, response.status_code, message)
        if response.status_code == 404:
            raise NotFoundError(message, response.status_code)
        if response.status_code in (400, 422):
            raise ValidationError(message, response.status_code)
        raise TreeApiError(message, response.status_code)

    def _snapshot(self, response: httpx.Response, failure: str) -> TreeSnapshot:
        try:
            return parse_snapshot(response.json(), strict=False)
        except ValueError as exc:
            raise TreeApiError(f"{failure}: {exc}", response.status_code) from exc

    def create(self, name: str, values: Iterable[int]) -> TreeSnapshot:
        """Build and persist a tree from ``values`` inserted in order."""

        payload = {"name": validate_name(name), "values": list(values)}
        if not payload["values"]:
            raise ValidationError("Please enter at least one number")
        response = self._request(
            "POST", self.base_url, json=payload, failure="Error creating tree"
        )
        return self._snapshot(response, "Error creating tree")

    def get(self, tree_id: Any) -> TreeSnapshot:
        response = self._request(
            "GET", f"{self.base_url}/{tree_id}", failure="Failed to load tree"
        )
        return self._snapshot(response, "Failed to load tree")

    def list(self, page: int = 0, page_size: int = DEFAULT_PAGE_SIZE) -> TreePage:
        if page < 0 or page_size <= 0:
            raise ValueError("page must be >= 0 and page_size must be positive")
        failure = "Failed to fetch previous trees"
        response = self._request(
            "GET",
            self.base_url,
            params={"page": page, "size": page_size},
            failure=failure,
        )
        try:
            body = response.json()
            trees = tuple(
                parse_snapshot(entry, strict=False) for entry in body.get("trees") or ()
            )
            total_count = int(body.get("totalCount", len(trees)))
            size = int(body.get("size", page_size))
        except (AttributeError, TypeError, ValueError) as exc:
            raise TreeApiError(f"{failure}: {exc}", response.status_code) from exc
        return TreePage(trees=trees, total_count=total_count, size=size, page=page)

    def delete(self, tree_id: Any) -> None:
        self._request(
            "DELETE", f"{self.base_url}/{tree_id}", failure="Failed to delete tree"
        )

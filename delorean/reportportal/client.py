"""A small HTTP client for the ReportPortal REST API."""

import dataclasses
import json
from typing import Any, Optional
from urllib.parse import urljoin, urlparse

import requests

from delorean.reportportal.launch import LaunchService

BASE_URL = "https://reportportal-reportportal.apps.chiron.intlyqe.com/api/v1/"


class ReportPortalError(Exception):
    """Raised when a request cannot be built or the server rejects it."""


class Client:
    """Builds and sends requests relative to a base URL."""

    def __init__(
        self, session: Optional[requests.Session] = None, base_url: str = BASE_URL
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.base_url = base_url
        self.launches = LaunchService(self)

    def new_request(self, method: str, url: str, body: Any = None) -> requests.Request:
        """Build a request for ``url`` resolved against the base URL.

        Bytes, text and file-like bodies are sent as they are; any other body,
        dataclasses included, is encoded as JSON.
        """
        if not urlparse(self.base_url).path.endswith("/"):
            raise ReportPortalError(
                f"BaseURL must have a trailing slash, but {self.base_url!r} does not"
            )
        if url.startswith("/"):
            raise ReportPortalError(
                f"relative path must not have a preceding slash: {url!r}"
            )

        data: Any = None
        if body is not None:
            if isinstance(body, (bytes, bytearray, str)) or hasattr(body, "read"):
                data = body
            else:
                if dataclasses.is_dataclass(body) and not isinstance(body, type):
                    body = dataclasses.asdict(body)
                data = (
                    json.dumps(body, separators=(",", ":"), ensure_ascii=False) + "\n"
                ).encode("utf-8")

        return requests.Request(
            method,
            urljoin(self.base_url, url),
            headers={"Accept": "application/json"},
            data=data,
        )

    def do(self, request: requests.Request) -> Any:
        """Send ``request`` and return the decoded JSON reply, or None if it is empty."""
        response = self.session.send(self.session.prepare_request(request))
        try:
            if not 200 <= response.status_code <= 299:
                raise ReportPortalError(
                    f"http error: url = {response.url!r}; status = {response.status_code}"
                )
            if not response.content.strip():
                return None
            try:
                return response.json()
            except ValueError as err:
                raise ReportPortalError(f"invalid JSON in response: {err}") from err
        finally:
            response.close()
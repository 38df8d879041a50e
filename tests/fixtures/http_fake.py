"""Offline stand-ins for ``urllib.request.urlopen`` and template archives."""

from __future__ import annotations

import io
import urllib.error
import zipfile
from typing import Any, Mapping


class FakeResponse:
    """Context manager mimicking an ``http.client.HTTPResponse``."""

    def __init__(self, body: bytes, status: int = 200) -> None:
        self._body = body
        self.status = status

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None


class FakeOpener:
    """Callable replacing ``urlopen`` that records every requested URL."""

    def __init__(self, body: bytes = b"", status: int = 200, error: Exception | None = None) -> None:
        self.body = body
        self.status = status
        self.error = error
        self.requests: list[Any] = []

    def __call__(self, request: Any, timeout: float | None = None) -> FakeResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return FakeResponse(self.body, self.status)

    @property
    def urls(self) -> list[str]:
        return [request.full_url for request in self.requests]


def http_error(url: str, code: int) -> urllib.error.HTTPError:
    return urllib.error.HTTPError(url, code, "error", None, None)


def build_zip(entries: Mapping[str, str | bytes]) -> bytes:
    """Return the bytes of a zip archive holding ``entries``.

    Names ending in ``/`` are written as explicit directory entries.
    """

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in entries.items():
            archive.writestr(name, b"" if name.endswith("/") else content)
    return buffer.getvalue()

"""Boundary document fetching and storage.

One GET per call, no retry adapter. Every attempt, successful or not, is
followed by a fixed pause so the remote service sees at most one request
per ``request_delay`` seconds.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Callable

import requests

from .config import DownloadConfig

log = logging.getLogger(__name__)


class FetchError(Exception):
    """A single fetch-and-store attempt failed."""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url
        self.message = message


class NetworkError(FetchError):
    """Connection, timeout or HTTP status failure."""


class ParseError(FetchError):
    """Response body is not JSON, or not the expected shape."""


class WriteError(FetchError):
    """The destination file could not be written."""


def make_session(config: DownloadConfig) -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": config.user_agent})
    return session


def dump_compact(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, allow_nan=False, separators=(",", ":"))


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def write_text(path: Path, text: str, url: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise WriteError(url, f"cannot write {path}: {exc}") from exc


def fetch_json(session: requests.Session, url: str, timeout: float) -> Any:
    """GET ``url`` once and return the decoded JSON body."""
    log.debug("GET %s", url)
    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise NetworkError(url, f"request failed: {exc}") from exc

    log.debug("  %d bytes from %s", len(resp.content), url)
    try:
        return json.loads(resp.content, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ParseError(url, f"invalid JSON: {exc}") from exc


class Fetcher:
    """Sequential fetch-and-store with a fixed post-request delay."""

    def __init__(self, config: DownloadConfig, session: requests.Session | None = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = config
        self.session = session if session is not None else make_session(config)
        self.sleep = sleep

    def __enter__(self) -> Fetcher:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.session.close()

    def fetch_json(self, url: str) -> Any:
        return fetch_json(self.session, url, self.config.timeout)

    def fetch_and_store(self, url: str, destination: Path) -> None:
        """Download ``url`` and write it as compact JSON to ``destination``.

        The body is parsed before anything is written, so a malformed
        response never leaves a partial file behind. Raises NetworkError,
        ParseError or WriteError; the delay applies in every case.
        """
        try:
            data = self.fetch_json(url)
            write_text(destination, dump_compact(data), url)
        finally:
            self.sleep(self.config.request_delay)

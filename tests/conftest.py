"""Shared fixtures for adm2json tests: an in-memory HTTP session and recorders."""

import io
import json
from dataclasses import replace

import pytest
import requests

from adm2json.config import DownloadConfig
from adm2json.console import Console
from adm2json.data import Fetcher

BASE_URL = "https://example.test/bound/"
INFO_URL = BASE_URL + "infos.json"

BEIJING_INDEX = {
    "100000": {"name": "China"},
    "110000": {"name": "Beijing"},
    "110100": {"name": "Beijing City"},
    "110101": {"name": "Dongcheng"},
}


def feature_collection(code):
    return {"type": "FeatureCollection",
            "features": [{"type": "Feature", "properties": {"adcode": int(code)}, "geometry": None}]}


class TtyStringIO(io.StringIO):
    def isatty(self):
        return True


class FakeResponse:
    def __init__(self, body: bytes, status_code: int = 200):
        self.content = body
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Maps URL -> bytes | dict | Exception | FakeResponse; unknown URLs are 404."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False

    def close(self):
        self.closed = True

    def get(self, url, timeout=None):
        self.calls.append(url)
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(b"Not Found", status_code=404)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, FakeResponse):
            return route
        if isinstance(route, (bytes, str)):
            return FakeResponse(route if isinstance(route, bytes) else route.encode("utf-8"))
        return FakeResponse(json.dumps(route, ensure_ascii=False).encode("utf-8"))


class SleepRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


class RecordingRenderer:
    def __init__(self):
        self.renders = []
        self.finishes = 0

    def render(self, state, label, item):
        self.renders.append((replace(state), label, item))

    def finish(self):
        self.finishes += 1


def routes_for(index, info_url=INFO_URL, base_url=BASE_URL):
    """Index document plus one boundary document per code."""
    routes = {info_url: index}
    for code in index:
        routes[f"{base_url}{code}.json"] = feature_collection(code)
    return routes


@pytest.fixture
def config(tmp_path):
    return DownloadConfig(output_dir=tmp_path / "out", base_url=BASE_URL, info_url=INFO_URL,
                          request_delay=0.2, color=False)


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def make_fetcher(sleeper):
    def _make(config, routes):
        return Fetcher(config, session=FakeSession(routes), sleep=sleeper)
    return _make


@pytest.fixture
def console(capsys):
    return Console(color=False)

"""Shared fixtures: an in-memory country backend behind httpx.MockTransport."""

import json
from urllib.parse import unquote

import httpx
import pytest

from country_console.utils.country_api_service import CountryAPI
from country_console.utils.country_service import CountryListClient
from country_console.utils.notices import NoticeBoard

BASE_URL = "http://backend.test/api"


class FakeBackend:
    """Mimics the country REST backend and records every request it sees."""

    def __init__(self, countries=None):
        self.countries = {c["id"]: dict(c) for c in (countries or [])}
        self.next_id = max(self.countries, default=0) + 1
        self.requests = []
        # (method, path) -> httpx.Response, checked before the normal routes
        self.overrides = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        raw = request.url.raw_path.decode("ascii")[len("/api"):]
        parts = [unquote(p) for p in raw.split("/") if p]
        key = (request.method, "/" + "/".join(parts))
        if key in self.overrides:
            override = self.overrides[key]
            if isinstance(override, Exception):
                raise override
            return override

        if parts == ["countries"]:
            if request.method == "GET":
                return httpx.Response(200, json=list(self.countries.values()))
            if request.method == "POST":
                body = json.loads(request.content)
                country = {"id": self.next_id, "name": body["name"], "code": body["code"]}
                self.countries[self.next_id] = country
                self.next_id += 1
                return httpx.Response(200, json=country)
        if len(parts) == 3 and parts[1] == "code":
            for c in self.countries.values():
                if c["name"] == parts[2]:
                    return httpx.Response(200, text=c["code"])
            return httpx.Response(404)
        if len(parts) == 3 and parts[1] == "country":
            for c in self.countries.values():
                if c["code"] == parts[2]:
                    return httpx.Response(200, text=c["name"])
            return httpx.Response(404)
        if len(parts) == 2:
            country_id = int(parts[1])
            if request.method == "DELETE":
                self.countries.pop(country_id, None)
                return httpx.Response(204)
            if country_id not in self.countries:
                return httpx.Response(404)
            if request.method == "GET":
                return httpx.Response(200, json=self.countries[country_id])
            if request.method == "PUT":
                body = json.loads(request.content)
                self.countries[country_id].update(name=body["name"], code=body["code"])
                return httpx.Response(200, json=self.countries[country_id])
        return httpx.Response(405)

    def calls(self, method=None):
        return [
            (r.method, r.url.path) for r in self.requests
            if method is None or r.method == method
        ]


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def backend():
    return FakeBackend([
        {"id": 1, "name": "Ethiopia", "code": "ET"},
        {"id": 2, "name": "Kenya", "code": "KE"},
    ])


@pytest.fixture
def api(backend):
    return CountryAPI(base_url=BASE_URL, transport=httpx.MockTransport(backend.handler))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def country_client(api, clock):
    return CountryListClient(api, notices=NoticeBoard(ttl_seconds=5, clock=clock))

"""Tests for the httpx client wrapping the country backend."""

import asyncio
import json

import httpx
import pytest

from country_console.schemas.country import CountryCreate, CountryUpdate
from country_console.utils.country_api_service import (
    CountryAPI,
    CountryNotFoundError,
    CountryServerError,
    CountryTransportError,
    extract_error_message,
)


def test_list_countries_keeps_server_order(api, backend):
    backend.countries = {9: {"id": 9, "name": "Zambia", "code": "ZM"}, 3: {"id": 3, "name": "Angola", "code": "AO"}}
    countries = asyncio.run(api.list_countries())
    assert [c.id for c in countries] == [9, 3]
    assert backend.calls() == [("GET", "/api/countries")]


def test_create_country_posts_name_and_code_only(api, backend):
    created = asyncio.run(api.create_country(CountryCreate(name="Testland", code="TL")))
    assert created.id == 3
    assert created.name == "Testland"
    request = backend.requests[-1]
    assert request.method == "POST"
    assert json.loads(request.read()) == {"name": "Testland", "code": "TL"}


def test_update_country_targets_id(api, backend):
    updated = asyncio.run(api.update_country(2, CountryUpdate(name="Kenya", code="KEN")))
    assert updated.code == "KEN"
    assert backend.calls() == [("PUT", "/api/countries/2")]


def test_delete_country_accepts_empty_body(api, backend):
    assert asyncio.run(api.delete_country(1)) is None
    assert 1 not in backend.countries


def test_lookups_return_bare_strings(api):
    assert asyncio.run(api.get_code_by_name("Ethiopia")) == "ET"
    assert asyncio.run(api.get_name_by_code("KE")) == "Kenya"


def test_lookup_escapes_name_in_path(api, backend):
    backend.countries[5] = {"id": 5, "name": "South Africa/North", "code": "ZA"}
    assert asyncio.run(api.get_code_by_name("South Africa/North")) == "ZA"
    assert backend.requests[-1].url.raw_path == b"/api/countries/code/South%20Africa%2FNorth"


def test_missing_country_raises_not_found(api):
    with pytest.raises(CountryNotFoundError) as exc_info:
        asyncio.run(api.get_country(42))
    assert exc_info.value.status_code == 404


def test_server_error_carries_structured_message(api, backend):
    backend.overrides[("POST", "/countries")] = httpx.Response(400, json={"message": "Code already exists"})
    with pytest.raises(CountryServerError) as exc_info:
        asyncio.run(api.create_country(CountryCreate(name="Kenya", code="KE")))
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Code already exists"


def test_network_failure_raises_transport_error(api, backend):
    backend.overrides[("GET", "/countries")] = httpx.ConnectError("connection refused")
    with pytest.raises(CountryTransportError):
        asyncio.run(api.list_countries())


class TestExtractErrorMessage:

    def test_prefers_structured_message(self):
        response = httpx.Response(500, json={"message": "Duplicate code", "error": "Bad"})
        assert extract_error_message(response) == "Duplicate code"

    def test_falls_back_to_raw_text(self):
        response = httpx.Response(400, text="Country name must not be blank")
        assert extract_error_message(response) == "Country name must not be blank"

    def test_json_without_message_uses_raw_text(self):
        response = httpx.Response(500, json={"error": "Internal Server Error"})
        assert extract_error_message(response) == response.text

    def test_empty_body_gives_none(self):
        assert extract_error_message(httpx.Response(500)) is None


def test_context_manager_closes_client(backend):
    async def run():
        async with CountryAPI(base_url="http://backend.test/api", transport=httpx.MockTransport(backend.handler)) as api:
            countries = await api.list_countries()
        return api, countries

    api, countries = asyncio.run(run())
    assert [c.code for c in countries] == ["ET", "KE"]
    assert api.client.is_closed


@pytest.mark.parametrize("body", [5, "Kenya", [{"id": "x", "name": "Kenya", "code": "KE"}]])
def test_malformed_list_body_raises_value_error(api, backend, body):
    backend.overrides[("GET", "/countries")] = httpx.Response(200, json=body)
    with pytest.raises(ValueError):
        asyncio.run(api.list_countries())

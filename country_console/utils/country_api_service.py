# country_console/utils/country_api_service.py

import httpx
from pydantic import TypeAdapter
from typing import Dict, List, Optional
from urllib.parse import quote
import logging
from country_console.core.config import settings
from country_console.schemas.country import CountryCreate, CountryUpdate, CountryResponse

logger = logging.getLogger(__name__)

country_list_adapter = TypeAdapter(List[CountryResponse])

class CountryAPIError(Exception):
    """Base error for calls against the country backend"""

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or "Country API request failed")
        self.message = message
        self.status_code = status_code

class CountryNotFoundError(CountryAPIError):
    """Raised when the backend answers 404"""
    pass

class CountryServerError(CountryAPIError):
    """Raised when the backend answers any other non-2xx status"""
    pass

class CountryTransportError(CountryAPIError):
    """Raised when the backend cannot be reached"""
    pass


def extract_error_message(response: httpx.Response) -> Optional[str]:
    """
    Most specific message available in an error response:
    the structured `message` field, then the raw body text.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()

    text = response.text.strip()
    return text or None


class CountryAPI:
    """
    Client for the country REST backend.
    Every call raises a CountryAPIError subclass on failure and never retries.
    """

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = (base_url or settings.COUNTRY_API_BASE_URL).rstrip("/")

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=settings.COUNTRY_API_TIMEOUT,
            transport=transport,
            headers={"Accept": "application/json"},
            event_hooks={
                "request": [self._log_request_url]
            }
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _log_request_url(self, request: httpx.Request):
        logger.debug(f"Country API request: {request.method} {request.url}")

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict] = None,
    ) -> httpx.Response:
        """Send one request; map transport failures and non-2xx statuses to exceptions"""
        try:
            response = await self.client.request(method=method, url=endpoint, json=data)
        except httpx.RequestError as e:
            logger.error(f"Country API network error on {method} {endpoint}: {str(e)}")
            raise CountryTransportError(f"Network error contacting country API: {str(e)}") from e

        if response.status_code == 404:
            raise CountryNotFoundError(extract_error_message(response), status_code=404)
        if response.is_error:
            raise CountryServerError(extract_error_message(response), status_code=response.status_code)
        return response

    # Endpoints

    async def list_countries(self) -> List[CountryResponse]:
        """Full collection, in server order"""
        response = await self._make_request("GET", "/countries")
        return country_list_adapter.validate_python(response.json())

    async def get_country(self, country_id: int) -> CountryResponse:
        response = await self._make_request("GET", f"/countries/{country_id}")
        return CountryResponse.model_validate(response.json())

    async def create_country(self, country: CountryCreate) -> CountryResponse:
        response = await self._make_request("POST", "/countries", data=country.model_dump())
        return CountryResponse.model_validate(response.json())

    async def update_country(self, country_id: int, country: CountryUpdate) -> CountryResponse:
        response = await self._make_request("PUT", f"/countries/{country_id}", data=country.model_dump())
        return CountryResponse.model_validate(response.json())

    async def delete_country(self, country_id: int) -> None:
        await self._make_request("DELETE", f"/countries/{country_id}")

    async def get_code_by_name(self, name: str) -> str:
        """Bare code string for a country name"""
        response = await self._make_request("GET", f"/countries/code/{quote(name, safe='')}")
        return response.text

    async def get_name_by_code(self, code: str) -> str:
        """Bare country name for a code"""
        response = await self._make_request("GET", f"/countries/country/{quote(code, safe='')}")
        return response.text

# country_console/utils/country_service.py

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .country_api_service import CountryAPI, CountryAPIError
from .country_error_handler import CountryErrorHandler, CountryValidationError, ErrorKind
from .notices import NoticeBoard
from country_console.schemas.country import CountryCreate, CountryUpdate, CountryResponse, FormState
from country_console.schemas.notices import LookupResult, NoticeLevel

logger = logging.getLogger(__name__)

EDIT_FORM_ANCHOR = "countryEditForm"

class UnknownCommandError(Exception):
    """Raised when dispatch() gets a command name with no handler"""
    pass

class ListStatus(Enum):
    PENDING = "pending"
    LOADED = "loaded"
    ERROR = "error"

class CountryListClient:
    """
    Keeps the rendered country list, the edit form and the two lookup panels
    in line with the remote collection.

    Every mutation goes through the backend and is followed by a full
    refresh(); nothing is patched locally. Failures become notices or lookup
    messages and never escape a command.
    """

    def __init__(self, api: CountryAPI, notices: Optional[NoticeBoard] = None):
        self.api = api
        self.notices = notices or NoticeBoard()
        self.form = FormState()
        self.countries: List[CountryResponse] = []
        self.list_status = ListStatus.PENDING
        self.code_result: Optional[LookupResult] = None
        self.country_result: Optional[LookupResult] = None
        self.focus: Optional[str] = None

        self.commands: Dict[str, Callable[[Dict[str, Any]], Awaitable[Any]]] = {
            "refresh": self._on_refresh,
            "submit": self._on_submit,
            "clear": self._on_clear,
            "edit": self._on_edit,
            "delete": self._on_delete,
            "lookup_code": self._on_lookup_code,
            "lookup_country": self._on_lookup_country,
            "dismiss": self._on_dismiss,
        }

    # Dispatch

    async def dispatch(self, command: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        handler = self.commands.get(command)
        if handler is None:
            raise UnknownCommandError(f"Unknown command: {command}")
        self.focus = None
        return await handler(payload or {})

    async def _on_refresh(self, payload: Dict[str, Any]):
        return await self.refresh()

    async def _on_submit(self, payload: Dict[str, Any]):
        raw_id = str(payload.get("id") or "").strip()
        try:
            country_id = int(raw_id) if raw_id else None
        except ValueError:
            return self._reject("submit", "Invalid country id")
        form = FormState(
            id=country_id,
            name=str(payload.get("name") or ""),
            code=str(payload.get("code") or ""),
        )
        return await self.submit(form)

    async def _on_clear(self, payload: Dict[str, Any]):
        self.clear()

    async def _on_edit(self, payload: Dict[str, Any]):
        country_id = self._parse_id(payload)
        if country_id is None:
            return self._reject("edit", "Invalid country id")
        return await self.begin_edit(country_id)

    async def _on_delete(self, payload: Dict[str, Any]):
        country_id = self._parse_id(payload)
        if country_id is None:
            return self._reject("delete", "Invalid country id")
        confirmed = str(payload.get("confirmed", "")).lower() in ("1", "true", "yes", "on")
        return await self.remove(country_id, confirmed=confirmed)

    async def _on_lookup_code(self, payload: Dict[str, Any]):
        return await self.lookup_code_by_name(str(payload.get("name") or ""))

    async def _on_lookup_country(self, payload: Dict[str, Any]):
        return await self.lookup_country_by_code(str(payload.get("code") or ""))

    async def _on_dismiss(self, payload: Dict[str, Any]):
        notice_id = self._parse_id(payload)
        return notice_id is not None and self.notices.dismiss(notice_id)

    @staticmethod
    def _parse_id(payload: Dict[str, Any]) -> Optional[int]:
        try:
            return int(str(payload.get("id", "")).strip())
        except ValueError:
            return None

    def _reject(self, operation: str, message: str) -> bool:
        CountryErrorHandler.log_error(operation, CountryValidationError(message))
        self.notices.danger(message)
        return False

    # Operations

    async def refresh(self) -> List[CountryResponse]:
        """Re-fetch the whole collection; on failure the list shows an error row"""
        try:
            countries = await self.api.list_countries()
        except (CountryAPIError, ValueError) as e:
            CountryErrorHandler.log_error("refresh", e)
            self.countries = []
            self.list_status = ListStatus.ERROR
            return []

        self.countries = countries
        self.list_status = ListStatus.LOADED
        logger.info(f"Loaded {len(countries)} countries")
        return countries

    async def submit(self, form: FormState) -> bool:
        """Create (no id) or update (id) the country described by the form"""
        self.form = form
        name, code = form.name.strip(), form.code.strip()
        if not name or not code:
            return self._reject("submit", "Country name and code are required")

        try:
            if form.is_editing:
                await self.api.update_country(form.id, CountryUpdate(name=name, code=code))
            else:
                await self.api.create_country(CountryCreate(name=name, code=code))
        except (CountryAPIError, ValueError) as e:
            CountryErrorHandler.log_error("submit", e, {"country_id": form.id})
            self.notices.danger(f"Error: {CountryErrorHandler.server_message(e, 'Server error')}")
            return False

        self.notices.success(f"Country {'updated' if form.is_editing else 'created'} successfully")
        self.clear()
        await self.refresh()
        return True

    async def begin_edit(self, country_id: int) -> bool:
        """Load one country into the form for editing"""
        try:
            country = await self.api.get_country(country_id)
        except (CountryAPIError, ValueError) as e:
            CountryErrorHandler.log_error("begin_edit", e, {"country_id": country_id})
            self.notices.danger("Error loading country data")
            return False

        self.form = FormState(id=country.id, name=country.name, code=country.code)
        self.focus = EDIT_FORM_ANCHOR
        return True

    async def remove(self, country_id: int, confirmed: bool = False) -> bool:
        """Delete a country; nothing is sent unless the user confirmed"""
        if not confirmed:
            logger.info(f"Delete of country {country_id} not confirmed, skipping")
            return False

        try:
            await self.api.delete_country(country_id)
        except CountryAPIError as e:
            CountryErrorHandler.log_error("remove", e, {"country_id": country_id})
            self.notices.danger(CountryErrorHandler.server_message(e, "Error deleting country"))
            return False

        self.notices.success("Country deleted successfully")
        await self.refresh()
        return True

    def clear(self) -> None:
        self.form = FormState()

    async def lookup_code_by_name(self, name: str) -> LookupResult:
        name = name.strip()
        if not name:
            self.code_result = LookupResult(message="Please enter a country name", level=NoticeLevel.danger)
            return self.code_result
        try:
            code = await self.api.get_code_by_name(name)
        except CountryAPIError as e:
            kind = CountryErrorHandler.log_error("lookup_code_by_name", e, {"country_name": name})
            message = "Country not found" if kind == ErrorKind.NOT_FOUND else "Server error"
            self.code_result = LookupResult(message=message, level=NoticeLevel.danger)
            return self.code_result

        self.code_result = LookupResult(message=f"Code: {code}", level=NoticeLevel.success)
        return self.code_result

    async def lookup_country_by_code(self, code: str) -> LookupResult:
        code = code.strip()
        if not code:
            self.country_result = LookupResult(message="Please enter a country code", level=NoticeLevel.danger)
            return self.country_result
        try:
            name = await self.api.get_name_by_code(code)
        except CountryAPIError as e:
            kind = CountryErrorHandler.log_error("lookup_country_by_code", e, {"country_code": code})
            message = "Code not found" if kind == ErrorKind.NOT_FOUND else "Server error"
            self.country_result = LookupResult(message=message, level=NoticeLevel.danger)
            return self.country_result

        self.country_result = LookupResult(message=f"Country: {name}", level=NoticeLevel.success)
        return self.country_result

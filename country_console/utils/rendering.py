# country_console/utils/rendering.py
"""
Context building and Jinja2 rendering for the console page.
Templates live in country_console/templates and are rendered with autoescape on.
"""

from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional

from fastapi.templating import Jinja2Templates

from country_console.schemas.country import CountryResponse, FormState
from country_console.schemas.notices import LookupResult
from .country_service import CountryListClient, EDIT_FORM_ANCHOR, ListStatus

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
COLUMNS = 4

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


class Placeholder(NamedTuple):
    message: str
    css: str


def placeholder_for(status: ListStatus, countries: List[CountryResponse]) -> Optional[Placeholder]:
    """The single row shown instead of the list, if any"""
    if status == ListStatus.ERROR:
        return Placeholder("Error loading countries", "text-center text-danger")
    if status == ListStatus.PENDING:
        return Placeholder("Loading...", "text-center")
    if not countries:
        return Placeholder("No countries found", "text-center")
    return None


def rows_context(status: ListStatus, countries: List[CountryResponse]) -> Dict[str, Any]:
    return {
        "placeholder": placeholder_for(status, countries),
        "countries": countries,
        "columns": COLUMNS,
    }


def page_context(client: CountryListClient, title: str) -> Dict[str, Any]:
    context = rows_context(client.list_status, client.countries)
    context.update(
        title=title,
        notices=client.notices.active(),
        form=client.form,
        anchor=EDIT_FORM_ANCHOR,
        code_result=client.code_result,
        country_result=client.country_result,
    )
    return context


def _render(name: str, context: Dict[str, Any]) -> str:
    return templates.get_template(name).render(**context)


def render_rows(status: ListStatus, countries: List[CountryResponse]) -> str:
    return _render("rows.html", rows_context(status, countries))


def render_form(form: FormState) -> str:
    return _render("form.html", {"form": form, "anchor": EDIT_FORM_ANCHOR})


def render_lookup(result: Optional[LookupResult]) -> str:
    return _render("lookup.html", {"result": result})


def render_page(client: CountryListClient, title: str) -> str:
    return _render("page.html", page_context(client, title))

# country_console/routers/console.py
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from country_console.core.config import settings
from country_console.utils.country_service import CountryListClient, UnknownCommandError
from country_console.utils.rendering import templates, page_context

router = APIRouter()

def get_country_client(request: Request) -> CountryListClient:
    return request.app.state.country_client

@router.get("/", response_class=HTMLResponse)
def show_console(request: Request, client: CountryListClient = Depends(get_country_client)):
    return templates.TemplateResponse(request, "page.html", page_context(client, settings.PROJECT_NAME))

# Deleting always goes through this confirmation page first
@router.get("/countries/{country_id}/delete", response_class=HTMLResponse)
def confirm_delete(request: Request, country_id: int):
    return templates.TemplateResponse(
        request,
        "delete_confirmation.html",
        {"country_id": country_id, "title": settings.PROJECT_NAME},
    )

@router.post("/commands/{command}")
async def run_command(
    command: str,
    request: Request,
    client: CountryListClient = Depends(get_country_client),
):
    form = await request.form()
    try:
        await client.dispatch(command, dict(form))
    except UnknownCommandError:
        raise HTTPException(status_code=404, detail=f"Unknown command: {command}")

    target = f"/#{client.focus}" if client.focus else "/"
    return RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)

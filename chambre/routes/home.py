"""
Chambre API: Welcome Page
===========================

What:  GET / returns a short HTML page pointing at the interactive docs.
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["Home"])

WELCOME_HTML = (
    "<!DOCTYPE html>"
    "<html><head><title>Chambre API</title></head>"
    "<body><p>Bienvenue sur l'API Chambre! "
    'Visitez <a href="/api-docs">/api-docs</a> pour la documentation.</p></body></html>'
)


@router.get("/", response_class=HTMLResponse, summary="Welcome page")
async def home() -> HTMLResponse:
    return HTMLResponse(content=WELCOME_HTML, status_code=200)

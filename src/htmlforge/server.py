"""FastAPI preview service for themed, inlined HTML.

Endpoints::

    GET  /health   Health check.
    GET  /themes   List available theme presets.
    POST /render   Send Markdown text, receive inlined HTML.

Install the optional dependencies and run::

    pip install "htmlforge[server]"
    uvicorn htmlforge.server:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import HTMLResponse

from htmlforge import __version__
from htmlforge.document import HtmlDocument
from htmlforge.errors import ValidationError
from htmlforge.presets import ThemePresets

logger = logging.getLogger(__name__)

app = FastAPI(
    title="htmlforge",
    description="Markdown to inline-styled HTML preview service",
    version=__version__,
)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.get("/themes")
async def list_themes() -> dict[str, list[str]]:
    """List available theme presets."""
    return {"themes": ThemePresets.PRESETS}


@app.post("/render", response_class=HTMLResponse)
async def render(
    markdown: str = Form(...),
    theme: str = Form("default"),
) -> HTMLResponse:
    """Render Markdown to HTML with the chosen theme inlined.

    - **markdown**: Markdown source text
    - **theme**: Theme preset name
    """
    try:
        preset = ThemePresets.get(theme)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        html = HtmlDocument(preset, lambda d: d.markdown(markdown)).build()
    except ValidationError as exc:
        logger.warning("Render failed: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return HTMLResponse(content=html)

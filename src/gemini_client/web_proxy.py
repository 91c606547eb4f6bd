"""Browser form and JSON API that forward text to the analyzer endpoint."""

from __future__ import annotations

import html
import logging
import os
from typing import Any, Mapping, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse

from gemini_client.analyzer_app import parse_body
from gemini_client.errors import AnalyzerError

logger = logging.getLogger(__name__)

ENV_FUNCTION_URL = "ANALYZE_FUNCTION_URL"
ENV_APP_ENV = "APP_ENV"
PRODUCTION_FUNCTION_URL = "https://us-central1-cloud-engineer-certify.cloudfunctions.net/analyzeText"
LOCAL_FUNCTION_URL = "http://localhost:8080"
FORWARD_TIMEOUT_SECONDS = 30.0
TEXT_REQUIRED = "Text is required."

STATS_LABELS = (
    ("wordCount", "Word Count"),
    ("characterCount", "Character Count"),
    ("uniqueWordCount", "Unique Word Count"),
)

PAGE_STYLE = """
    body { font-family: Arial, sans-serif; margin: 2rem; max-width: 720px; }
    form { display: grid; gap: 1rem; }
    textarea { width: 100%; min-height: 10rem; padding: 0.75rem; font-size: 1rem; }
    button { width: 10rem; padding: 0.5rem 1rem; font-size: 1rem; cursor: pointer; }
    .message { padding: 0.75rem; border-radius: 0.25rem; }
    .error { background: #ffd6d6; border: 1px solid #cc4b4b; }
    .results { margin-top: 2rem; background: #f5f5f5; padding: 1rem; border-radius: 0.25rem; }
    dt { font-weight: bold; }
    dd { margin: 0; }
"""


def resolve_function_url(env: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if env is None else env
    configured = env.get(ENV_FUNCTION_URL)
    if configured:
        return configured
    if env.get(ENV_APP_ENV) == "production":
        return PRODUCTION_FUNCTION_URL
    return LOCAL_FUNCTION_URL


def render_page(
    function_url: str,
    *,
    text: str = "",
    stats: Optional[Mapping[str, Any]] = None,
    error: Optional[str] = None,
) -> str:
    message_html = f'<p class="message error">{html.escape(error)}</p>' if error else ""
    stats_html = ""
    if stats:
        rows = "\n".join(
            f"    <div><dt>{label}</dt><dd>{html.escape(str(stats.get(key, '')))}</dd></div>"
            for key, label in STATS_LABELS
        )
        stats_html = f'<section class="results">\n  <h2>Analysis Result</h2>\n  <dl>\n{rows}\n  </dl>\n</section>'

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Text Analyzer Proxy</title>
  <style>{PAGE_STYLE}</style>
</head>
<body>
  <h1>Text Analyzer</h1>
  <p>Submit text below to analyze it with the Cloud Function at <code>{html.escape(function_url)}</code>.</p>
  {message_html}
  <form action="/submit" method="post">
    <label for="text">Text to analyze</label>
    <textarea id="text" name="text" required>{html.escape(text)}</textarea>
    <button type="submit">Analyze</button>
  </form>
  {stats_html}
</body>
</html>"""


async def forward_text(client: httpx.AsyncClient, function_url: str, text: str) -> dict[str, Any]:
    response = await client.post(function_url, json={"text": text}, timeout=FORWARD_TIMEOUT_SECONDS)
    if not response.is_success:
        raise AnalyzerError(f"Analyzer responded with {response.status_code}: {response.text}")
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        raise AnalyzerError(f"Analyzer response was not JSON: {response.text}")
    return payload


async def submitted_text(request: Request) -> str:
    payload = parse_body(await request.body(), request.headers.get("content-type", ""))
    text = payload.get("text") if isinstance(payload, dict) else None
    return text if isinstance(text, str) else ""


def create_proxy_app(
    function_url: Optional[str] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the proxy app. ``transport`` replaces the network transport of the
    outgoing analyzer requests.
    """
    target_url = function_url or resolve_function_url()
    app = FastAPI(title="Text analyzer proxy")
    logger.info("Forwarding analyzer requests to %s", target_url)

    async def analyze(text: str) -> dict[str, Any]:
        async with httpx.AsyncClient(transport=transport) as client:
            return await forward_text(client, target_url, text)

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        return HTMLResponse(render_page(target_url))

    @app.post("/submit", response_class=HTMLResponse)
    async def submit(request: Request) -> HTMLResponse:
        text = await submitted_text(request)
        if not text.strip():
            return HTMLResponse(render_page(target_url, text=text, error=TEXT_REQUIRED), status_code=400)
        try:
            stats = await analyze(text)
        except (AnalyzerError, httpx.HTTPError) as exc:
            logger.warning("Analyzer request failed: %s", exc)
            return HTMLResponse(render_page(target_url, text=text, error=str(exc)), status_code=502)
        return HTMLResponse(render_page(target_url, text=text, stats=stats))

    @app.post("/api/analyze")
    async def analyze_api(request: Request) -> JSONResponse:
        text = await submitted_text(request)
        if not text.strip():
            return JSONResponse({"error": TEXT_REQUIRED}, status_code=400)
        try:
            stats = await analyze(text)
        except (AnalyzerError, httpx.HTTPError) as exc:
            logger.warning("Analyzer request failed: %s", exc)
            return JSONResponse({"error": "Failed to reach analyzer.", "details": str(exc)}, status_code=502)
        return JSONResponse({"text": text, "stats": stats})

    return app

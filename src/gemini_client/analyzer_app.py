"""HTTP endpoint that returns text statistics."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import parse_qs

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from gemini_client.text_stats import analyze_text_stats

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
ANALYZE_METHODS = ("GET", "POST")
# Every method is routed to the handler so unsupported ones get the CORS headers with their 405.
ROUTED_METHODS = ["GET", "POST", "OPTIONS", "PUT", "PATCH", "DELETE", "HEAD"]


def parse_body(body: bytes, content_type: str) -> Any:
    """
    Decode a request body the way its content type describes it.
    JSON that fails to parse yields None; other bodies come back as text.
    """
    text = body.decode("utf-8", errors="replace")
    if "json" in content_type:
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return None
    if "application/x-www-form-urlencoded" in content_type:
        return {key: values[-1] for key, values in parse_qs(text, keep_blank_values=True).items()}
    return text


async def request_text(request: Request) -> str:
    body = await request.body()
    if body:
        payload = parse_body(body, request.headers.get("content-type", ""))
        if isinstance(payload, dict) and isinstance(payload.get("text"), str):
            return payload["text"]
        if isinstance(payload, str):
            return payload
    query_text = request.query_params.get("text")
    return query_text if query_text is not None else ""


async def analyze_text(request: Request) -> Response:
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)
    if request.method not in ANALYZE_METHODS:
        return JSONResponse({"error": "Method not allowed"}, status_code=405, headers=CORS_HEADERS)

    stats = analyze_text_stats(await request_text(request))
    logger.debug("Analyzed %s characters", stats.character_count)
    return JSONResponse(stats.model_dump(by_alias=True), headers=CORS_HEADERS)


def create_analyzer_app() -> FastAPI:
    app = FastAPI(title="Text analyzer")
    app.add_api_route("/", analyze_text, methods=ROUTED_METHODS)
    return app

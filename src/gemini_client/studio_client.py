"""Google AI Studio generateContent client over httpx."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import httpx

from gemini_client.errors import StudioRequestError
from gemini_client.io_utils import write_json
from gemini_client.models.studio_config import StudioConfig

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 200
REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_PROMPT = "Explain what Google AI Studio is and what the Gemini API can do, within 70 words"


def build_request_payload(text: str) -> dict[str, Any]:
    return {"contents": [{"parts": [{"text": text}]}]}


async def generate_content(
    client: httpx.AsyncClient,
    *,
    base_url: str,
    model: str,
    api_key: str,
    prompt: str,
    extra_headers: Optional[dict[str, str]] = None,
) -> Any:
    if not prompt:
        raise ValueError("Prompt text is required")

    headers = {
        "Content-Type": "application/json",
        "X-goog-api-key": api_key,
        **(extra_headers or {}),
    }
    response = await client.post(
        f"{base_url}/{model}:generateContent",
        headers=headers,
        json=build_request_payload(prompt),
        timeout=REQUEST_TIMEOUT_SECONDS,
    )
    if response.status_code != SUCCESS_STATUS:
        raise StudioRequestError(response.status_code, response.text)
    return response.json()


async def run(
    config: StudioConfig,
    *,
    prompt: str = DEFAULT_PROMPT,
    client: Optional[httpx.AsyncClient] = None,
    raise_errors: bool = False,
) -> Any:
    """
    Send one prompt and persist the JSON result to ``config.output_path``.
    Failures are logged; they propagate only when ``raise_errors`` is set.
    """
    try:
        if client is None:
            async with httpx.AsyncClient() as owned_client:
                result = await _generate(owned_client, config, prompt)
        else:
            result = await _generate(client, config, prompt)
    except (httpx.HTTPError, StudioRequestError, ValueError) as exc:
        logger.error("AI Studio request failed for prompt %r: %s", prompt, exc)
        if raise_errors:
            raise
        return None

    persist_result(config.output_path, result)
    logger.info("AI Studio response received (output_path=%s)", config.output_path)
    return result


async def _generate(client: httpx.AsyncClient, config: StudioConfig, prompt: str) -> Any:
    return await generate_content(
        client,
        base_url=config.base_url,
        model=config.model,
        api_key=config.api_key,
        prompt=prompt,
    )


def persist_result(output_path: Path | None, result: Any) -> None:
    if output_path is None:
        return
    try:
        write_json(output_path, result)
    except OSError as exc:
        logger.warning("Failed to persist AI Studio response to %s: %s", output_path, exc)
        return
    logger.info("AI Studio response saved to %s", output_path)

"""CLI entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

from gemini_client.config_resolver import build_config, snapshot_environment
from gemini_client.io_utils import build_report_writer, read_json_file, utc_timestamp
from gemini_client.model_factory import ClientFactory, get_model
from gemini_client.models.run_report import RunError, RunReport
from gemini_client.studio_client import DEFAULT_PROMPT
from gemini_client.studio_client import run as run_studio
from gemini_client.studio_config import load_studio_config

logger = logging.getLogger(__name__)

DEFAULT_RESULTS_DIR = "results"
ANALYZER_PORT = 8080
WEB_PORT = 3000


def payload_overrides(payload: Mapping[str, Any]) -> dict[str, Any]:
    raw_overrides = payload.get("overrides")
    overrides = dict(raw_overrides) if isinstance(raw_overrides, Mapping) else {}
    model = payload.get("model")
    if not overrides.get("model") and isinstance(model, str) and model.strip():
        overrides["model"] = model.strip()
    return overrides


def run_from_config(
    payload_path: Path,
    results_dir: Path,
    *,
    env: Optional[Mapping[str, str]] = None,
    create_client: Optional[ClientFactory] = None,
) -> int:
    """
    Resolve the payload's configuration, optionally invoke the model, and write a report.
    Returns the process exit code.
    """
    absolute_path = payload_path.expanduser().resolve(strict=False)
    try:
        payload = read_json_file(absolute_path)
    except (OSError, ValueError) as exc:
        logger.error("Failed to load JSON file at %s: %s", absolute_path, exc)
        return 1
    if not isinstance(payload, dict):
        logger.error("Expected a JSON object in %s", absolute_path)
        return 1

    env = snapshot_environment() if env is None else env
    overrides = payload_overrides(payload)
    request = payload.get("request")
    config = build_config(overrides, env=env)
    report = RunReport(
        input_file=str(absolute_path),
        generated_at=utc_timestamp(),
        config=config.model_dump(mode="json", by_alias=True),
        overrides=overrides,
        request=request,
    )
    print("Resolved configuration:")
    print(json.dumps(report.config, indent=2))

    write_report = build_report_writer(absolute_path, results_dir)

    if not request:
        logger.info("No request payload supplied; skipping model invocation.")
        output_path = write_report(report, "no-request")
        logger.info("Report written to %s", output_path)
        return 0

    model = get_model(overrides, create_client=create_client, env=env)
    try:
        response = model.generate_content(request)
    except Exception as exc:  # SDK and transport errors go into the report
        report.error = RunError(name=type(exc).__name__, message=str(exc))
        logger.error("Model invocation failed: %s", exc)
        output_path = write_report(report, "error")
        logger.info("Failure report written to %s", output_path)
        return 1

    report.response = response
    print("Model response:")
    print(json.dumps(response, indent=2, default=str))
    output_path = write_report(report, "success")
    logger.info("Report written to %s", output_path)
    return 0


def serve(app_name: str, host: str, port: Optional[int] = None) -> None:
    import uvicorn

    if app_name == "analyzer":
        from gemini_client.analyzer_app import create_analyzer_app

        app = create_analyzer_app()
        default_port = ANALYZER_PORT
    else:
        from gemini_client.web_proxy import create_proxy_app

        app = create_proxy_app()
        default_port = int(os.environ.get("PORT") or WEB_PORT)

    bind_port = port or default_port
    logger.info("Serving %s on http://%s:%s", app_name, host, bind_port)
    uvicorn.run(app, host=host, port=bind_port)


async def run_studio_prompt(prompt: str, raise_errors: bool) -> int:
    config = load_studio_config()
    result = await run_studio(config, prompt=prompt, raise_errors=raise_errors)
    if result is None:
        return 1
    print(json.dumps(result, indent=2))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(prog="gemini-client")
    parser.add_argument("--log-level", type=str, default="INFO")
    subparsers = parser.add_subparsers(dest="command", required=True)

    vertex_parser = subparsers.add_parser("vertex", help="Resolve config and call Gemini on Vertex AI")
    vertex_parser.add_argument("payload", type=str, help="Path to a JSON payload with overrides and request")
    vertex_parser.add_argument("--results-dir", type=str, default=DEFAULT_RESULTS_DIR)

    studio_parser = subparsers.add_parser("studio", help="Send a prompt to Google AI Studio")
    studio_parser.add_argument("--prompt", type=str, default=DEFAULT_PROMPT)

    serve_parser = subparsers.add_parser("serve", help="Serve the text analyzer or its web proxy")
    serve_parser.add_argument("app", choices=["analyzer", "web"])
    serve_parser.add_argument("--host", type=str, default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "vertex":
        sys.exit(run_from_config(Path(args.payload), Path(args.results_dir)))
    if args.command == "serve":
        serve(args.app, args.host, args.port)
        return

    # Async entrypoint
    import anyio

    raise_errors = bool(os.environ.get("CI"))
    sys.exit(anyio.run(run_studio_prompt, args.prompt, raise_errors))


if __name__ == "__main__":
    main()

"""Command-line interface for plainrequest."""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ...config.settings import get_settings
from ...domain.errors import RequestError
from ...domain.models import Result
from ...infrastructure.http.client import HTTPClientFactory
from ...infrastructure.http.dispatcher import VERBS, ResponseStream, create_context
from ...utils.logging_utils import configure_logging

console = Console()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plainrequest",
        description="Send a single HTTP request and print the response.",
    )
    parser.add_argument("method", help="HTTP verb, e.g. get or post")
    parser.add_argument("target", help="Full URL, or a path when an origin is configured")
    parser.add_argument("--origin", help="Origin joined with a path target (env: PLAINREQUEST_ORIGIN)")
    parser.add_argument("--port", type=int, help="Default port (env: PLAINREQUEST_PORT)")
    parser.add_argument("-d", "--data", help="Request body, sent verbatim")
    parser.add_argument("--stream", action="store_true", help="Print the body as it arrives")
    parser.add_argument("--json", dest="json_output", action="store_true", help="Output as JSON")
    parser.add_argument("--log-level", help="Log level (env: PLAINREQUEST_LOG_LEVEL)")
    return parser


def _render_body(body: Any) -> Any:
    """Pick a rich renderable for a decoded body."""
    if isinstance(body, (dict, list)):
        return JSON.from_data(body)
    return Text("" if body is None else str(body))


def _status_color(status_code: int) -> str:
    if status_code > 400:
        return "red"
    if status_code >= 300:
        return "yellow"
    return "green"


def _print_result(result: Result, json_output: bool = False) -> None:
    """Print a buffered result.

    Args:
        result: Result to print.
        json_output: If True, output as JSON. Otherwise, print a panel.
    """
    if json_output:
        console.print_json(json.dumps(result.model_dump(), default=str))
        return

    color = _status_color(result.status_code)
    console.print(
        Panel(
            _render_body(result.body),
            title=f"[bold {color}]{result.status_code}[/bold {color}]",
            border_style=color,
            padding=(1, 2),
        )
    )


def _print_error(error: Exception, json_output: bool = False) -> None:
    if json_output:
        payload: Dict[str, Any] = {"error": str(error)}
        if isinstance(error, RequestError):
            payload.update(status_code=error.status_code, body=error.body)
        console.print_json(json.dumps(payload, default=str))
        return

    content: Any = f"[red]Error:[/red] {escape(str(error))}"
    if isinstance(error, RequestError) and error.body not in (None, ""):
        content = _render_body(error.body)
    console.print(
        Panel(
            content,
            title=f"[bold red]{escape(str(error))}[/bold red]",
            border_style="red",
        )
    )


async def _stream_body(stream: ResponseStream) -> None:
    async with stream:
        console.print(f"[dim]status {stream.status_code}[/dim]")
        async for chunk in stream.aiter_text():
            console.print(chunk, end="", markup=False, highlight=False)
    console.print()


async def _send(
    method: str,
    target: str,
    origin: Optional[str],
    port: Optional[int],
    data: Optional[str],
    is_stream: bool,
    json_output: bool,
) -> int:
    """Send one request and print its outcome.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    async with HTTPClientFactory.create() as client:
        request = create_context(origin=origin, port=port, http_client=client)

        location = {"url": target} if "://" in target else {"path": target}
        verb = method.lower()
        send = request.stream if is_stream else request
        if verb in VERBS:
            send = getattr(send, verb)
        else:
            location["method"] = verb

        try:
            outcome = await send(body=data, **location)
        except Exception as e:
            _print_error(e, json_output=json_output)
            return 1

        if isinstance(outcome, ResponseStream):
            await _stream_body(outcome)
        else:
            _print_result(outcome, json_output=json_output)
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Usage:
        plainrequest get https://example.com/items
        plainrequest --origin http://localhost --port 3000 post /items -d '{"a": 1}'
        plainrequest --stream get https://example.com/large

    Returns:
        Exit code (0 for success, 1 for error).
    """
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level)

    return asyncio.run(
        _send(
            method=args.method,
            target=args.target,
            origin=args.origin or settings.origin,
            port=args.port or settings.port,
            data=args.data,
            is_stream=args.stream,
            json_output=args.json_output,
        )
    )


if __name__ == "__main__":
    sys.exit(main())

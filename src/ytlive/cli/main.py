"""CLI entry point for ytlive.

``ytlive details VIDEO_ID`` fetches the live streaming details of a video.
Retryable outcomes are re-issued up to ``--attempts`` times with a fixed
``--delay`` between attempts.
"""

import asyncio
from typing import Optional

import httpx
import typer
from rich.console import Console

from .. import __version__
from ..api import LiveStreamingDetails, get_live_streaming_details
from ..core.config import Config, ConfigError, ConfigManager
from ..outcome import Outcome, Retryable, match, prefix
from ..runtime.logging import bootstrap_logging
from ..util.log import Log

EXIT_FAILURE = 1
EXIT_RETRIES_EXHAUSTED = 2

app = typer.Typer(
    name="ytlive",
    help="ytlive - YouTube live streaming details client",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)
log = Log.create({"service": "cli"})


def _positive_timeout(value: Optional[float]) -> Optional[float]:
    if value is not None and value <= 0:
        raise typer.BadParameter("must be greater than 0")
    return value


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"ytlive {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """ytlive - YouTube live streaming details client."""


async def _fetch_with_retries(
    cfg: Config,
    api_key: str,
    video_id: str,
    *,
    attempts: int,
    delay: float,
    timeout: float,
) -> Outcome[LiveStreamingDetails]:
    async with httpx.AsyncClient(timeout=timeout) as client:
        attempt = 1
        while True:
            outcome = await get_live_streaming_details(
                client,
                api_key,
                video_id,
                base_url=cfg.base_url,
            )
            if not isinstance(outcome, Retryable) or attempt >= attempts:
                return outcome
            log.warn("retrying", {"id": video_id, "attempt": attempt, "reason": outcome.reason})
            err_console.print(f"attempt {attempt} retryable: {outcome.reason}", markup=False, soft_wrap=True)
            attempt += 1
            await asyncio.sleep(delay)


def _render_details(details: LiveStreamingDetails, as_json: bool) -> None:
    if as_json:
        console.print(details.model_dump_json(by_alias=True, exclude_none=True), markup=False, soft_wrap=True)
        return
    for name, value in details.model_dump(by_alias=True, exclude_none=True).items():
        text = value.isoformat() if hasattr(value, "isoformat") else str(value)
        console.print(f"{name}: {text}", markup=False, soft_wrap=True)


@app.command("details")
def details_command(
    video_id: str = typer.Argument(..., help="Video ID"),
    api_key: Optional[str] = typer.Option(
        None,
        "--api-key",
        "-k",
        help="API key (defaults to config apiKey or YTLIVE_API_KEY)",
    ),
    attempts: int = typer.Option(3, "--attempts", "-n", min=1, help="Maximum attempts for retryable outcomes"),
    delay: float = typer.Option(1.0, "--delay", min=0.0, help="Seconds to wait between attempts"),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        callback=_positive_timeout,
        help="Request timeout in seconds (defaults to config timeout)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print details as JSON"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level (debug, info, warn, error)"),
) -> None:
    """Show live streaming details for a video."""
    try:
        cfg = asyncio.run(ConfigManager.get())
    except ConfigError as e:
        err_console.print(str(e), markup=False, soft_wrap=True)
        raise typer.Exit(EXIT_FAILURE)

    try:
        bootstrap_logging(cfg, level=log_level)
    except ValueError as e:
        err_console.print(str(e), markup=False, soft_wrap=True)
        raise typer.Exit(EXIT_FAILURE)

    key = api_key or cfg.api_key
    if not key:
        err_console.print("No API key: pass --api-key or set YTLIVE_API_KEY", markup=False)
        raise typer.Exit(EXIT_FAILURE)

    outcome = asyncio.run(
        _fetch_with_retries(
            cfg,
            key,
            video_id,
            attempts=attempts,
            delay=delay,
            timeout=cfg.timeout if timeout is None else timeout,
        )
    )
    if isinstance(outcome, Retryable):
        outcome = prefix(outcome, f"Gave up after {attempts} attempt(s)")

    def on_retryable(reason: str) -> int:
        err_console.print(reason, markup=False, soft_wrap=True)
        return EXIT_RETRIES_EXHAUSTED

    def on_failure(reason: str) -> int:
        err_console.print(reason, markup=False, soft_wrap=True)
        return EXIT_FAILURE

    def on_success(details: LiveStreamingDetails) -> int:
        _render_details(details, as_json)
        return 0

    code = match(outcome, success=on_success, retryable=on_retryable, failure=on_failure)
    if code:
        raise typer.Exit(code)


if __name__ == "__main__":
    app()

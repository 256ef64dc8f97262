"""Collect command for printing fleet metrics."""

import json
import logging
import time

import typer
from rich.box import ROUNDED
from rich.table import Table

from agentmetrics.cli._console import (
    console,
    dim,
    error,
    error_panel,
    nl,
    setup_logging,
)
from agentmetrics.config import get_settings
from agentmetrics.contracts.metrics import CollectResult, MetricName
from agentmetrics.engine.collector import Collector
from agentmetrics.errors import CollectError, UnexpectedStatus

logger = logging.getLogger(__name__)


def collect(
    endpoint: str | None = typer.Option(
        None,
        "--endpoint",
        "-e",
        help="Metrics endpoint (overrides AGENTMETRICS_ENDPOINT)",
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        "-t",
        help="Agent token (overrides AGENTMETRICS_TOKEN)",
    ),
    user_agent: str | None = typer.Option(
        None,
        "--user-agent",
        help="User-Agent header sent with each request",
    ),
    queues: list[str] = typer.Option(
        None,
        "--queue",
        "-q",
        help="Queue to collect, repeatable (default: all queues)",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print metrics as JSON",
    ),
    interval: float = typer.Option(
        0.0,
        "--interval",
        "-i",
        min=0.0,
        help="Collect every N seconds until interrupted (0 collects once)",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        min=0.0,
        help="Request timeout in seconds, 0 disables",
    ),
    debug_http: bool = typer.Option(
        False,
        "--debug-http",
        help="Log HTTP requests and responses",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """
    Collect queue and agent metrics.

    Examples:
        agentmetrics collect --token $TOKEN
        agentmetrics collect --token $TOKEN --queue deploy --queue default
        agentmetrics collect --json --interval 30
    """
    settings = get_settings()
    setup_logging(verbose=verbose or debug_http or settings.debug)

    resolved_token = token or settings.token
    if not resolved_token:
        error_panel(
            "No token configured. Pass --token or set AGENTMETRICS_TOKEN.",
            title="Configuration error",
        )
        raise typer.Exit(1)

    if timeout is None:
        resolved_timeout = settings.timeout
    else:
        resolved_timeout = timeout or None

    collector = Collector(
        endpoint=endpoint or settings.endpoint,
        token=resolved_token,
        user_agent=user_agent or settings.user_agent,
        queues=tuple(queues or settings.queues),
        timeout=resolved_timeout,
        debug_http=debug_http or settings.debug_http,
    )

    if not interval:
        try:
            result = collector.collect_sync()
        except CollectError as e:
            error_panel(str(e), title=_error_title(e))
            raise typer.Exit(1)
        _print_result(result, as_json=as_json)
        return

    try:
        while True:
            try:
                _print_result(collector.collect_sync(), as_json=as_json)
            except CollectError as e:
                logger.error("Collect failed: %s", e)
            time.sleep(interval)
    except KeyboardInterrupt:
        nl()
        dim("Stopped")


def _error_title(exc: CollectError) -> str:
    if isinstance(exc, UnexpectedStatus) and exc.status in (401, 403):
        return "Unauthorized"
    return "Collect failed"


def _print_result(result: CollectResult, *, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(result.as_dict(), indent=2))
        return

    queues = result.queues_dict()
    totals = result.totals_dict()
    if not totals and not queues:
        error("No metrics returned")
        return

    table = Table(box=ROUNDED, border_style="dim", header_style="bold")
    table.add_column("Metric", style="cyan", no_wrap=True)
    if totals:
        table.add_column("Totals", justify="right")
    for name in queues:
        table.add_column(name, justify="right")

    for metric in MetricName:
        row = [str(metric)]
        if totals:
            row.append(str(totals[metric]))
        row.extend(str(bucket[metric]) for bucket in queues.values())
        table.add_row(*row)

    nl()
    console.print(table)
    nl()

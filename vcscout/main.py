"""
Main application entry point for VC Scout.

Provides a CLI for one-off enrichments and for running the API server.
"""

import json
import sys
from typing import Optional

import click
from dotenv import load_dotenv
from rich.console import Console

from vcscout.api.app import build_pipeline
from vcscout.core.config import get_settings, print_configuration_summary, validate_required_settings
from vcscout.core.exceptions import VCScoutError
from vcscout.core.logging import set_correlation_id, setup_logging
from vcscout.core.models import EnrichmentRequest
from vcscout.intelligence.cache import InMemoryEnrichmentCache

console = Console()


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit JSON log lines instead of rich output")
@click.option("--correlation-id", help="Set correlation ID for request tracing")
@click.pass_context
def main(ctx, debug: bool, json_logs: bool, correlation_id: Optional[str]):
    """Company enrichment for venture research.

    Fetches a company's website, summarises it with an LLM, and scores
    the result against an optional investment thesis.
    """
    ctx.ensure_object(dict)
    load_dotenv()

    setup_logging(debug=debug or get_settings().debug, rich_output=not json_logs)

    if correlation_id:
        set_correlation_id(correlation_id)

    ctx.obj["debug"] = debug
    ctx.obj["correlation_id"] = correlation_id


@main.command()
@click.option("--company", "company_name", required=True, help="Company name")
@click.option("--website", required=True, help="Company website (hostname or URL)")
@click.option("--thesis", help="Free-text investment thesis to score against")
@click.pass_context
def enrich(ctx, company_name: str, website: str, thesis: Optional[str]):
    """Enrich a single company and print the result as JSON."""
    settings = get_settings()
    missing = validate_required_settings(settings)
    if missing:
        console.print("[red]Configuration Error:[/red]")
        for item in missing:
            console.print(f"  • Missing: {item}")
        sys.exit(1)

    pipeline = build_pipeline(settings, InMemoryEnrichmentCache(settings.cache.ttl_seconds))
    request = EnrichmentRequest(website=website, company_name=company_name, thesis=thesis)

    try:
        result = pipeline.run(request)
    except VCScoutError as e:
        console.print(f"[red]Enrichment Error:[/red] {e.message}")
        if ctx.obj.get("debug"):
            console.print_exception()
        sys.exit(1)

    click.echo(json.dumps(result.to_payload(), indent=2))


@main.command()
@click.option("--host", help="Bind address (default: SERVICE_HOST)")
@click.option("--port", type=int, help="Port (default: SERVICE_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the enrichment API server."""
    import uvicorn

    settings = get_settings()
    missing = validate_required_settings(settings)
    if missing:
        console.print(
            f"[yellow]Warning:[/yellow] {', '.join(missing)} missing; "
            "enrichment requests will return 503"
        )

    uvicorn.run(
        "vcscout.api.app:create_app",
        factory=True,
        host=host or settings.service_host,
        port=port or settings.service_port,
        reload=reload,
    )


@main.command("config")
def show_config():
    """Print the current configuration."""
    print_configuration_summary(console)


if __name__ == "__main__":
    main()

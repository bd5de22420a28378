"""Command-line interface for the newsquiz system using Typer and Rich."""

import asyncio
import sys
import time
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from newsquiz_system import __version__
from newsquiz_system.config.logging import configure_logging, get_logger
from newsquiz_system.config.news_sources import NEWS_SOURCES
from newsquiz_system.config.settings import settings
from newsquiz_system.data_management.claim_store import ClaimStore
from newsquiz_system.data_management.schemas import PublishedClaim
from newsquiz_system.errors import ConfigurationError, StoreError

app = typer.Typer(
    help="News quiz claim generation and moderation",
    add_completion=False,
)

console = Console()

logger = get_logger("cli")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL"),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(level=log_level)


def _open_store() -> ClaimStore:
    try:
        return ClaimStore(persistence_path=settings.store_path)
    except StoreError as e:
        console.print(f"[red]✗[/red] Could not open claim store: {e}")
        raise typer.Exit(1)


def _claims_table(title: str, claims: List[PublishedClaim]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("True claim", style="green")
    table.add_column("False claim", style="red")
    table.add_column("Source", style="cyan")
    table.add_column("Date")
    table.add_column("Shown", justify="right")
    table.add_column("Reported", justify="right")
    for claim in claims:
        table.add_row(
            claim.id[:8],
            claim.true_claim,
            claim.false_claim,
            claim.source,
            claim.date.isoformat(),
            str(claim.times_shown),
            str(claim.times_reported),
        )
    return table


async def _resolve_id(store: ClaimStore, prefix: str) -> str:
    """Expand a short id prefix (as printed in tables) to a full claim id."""
    claims = await store.select_low_exposure_approved(limit=sys.maxsize)
    claims += await store.list_drafts()
    matches = {c.id for c in claims if c.id.startswith(prefix)}
    if len(matches) == 1:
        return matches.pop()
    return prefix


@app.command()
def status() -> None:
    """Display configuration and store status."""
    store = _open_store()
    approved = asyncio.run(store.count_approved())
    drafts = asyncio.run(store.list_drafts())
    reported = asyncio.run(store.select_reported(min_report_count=1, limit=sys.maxsize))

    table = Table(title="News Quiz Status", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", width=20)
    table.add_column("Status", style="green", width=15)
    table.add_column("Details", style="yellow")

    python_version = f"Python {sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    table.add_row("Environment", "✓ Ready", python_version)

    api_status = "✓ Configured" if settings.gemini_api_key else "⚠ Not Configured"
    table.add_row("Gemini API", api_status, f"{settings.gemini_model} (RPM: {settings.max_rpm})")

    table.add_row("Sources", f"{len(NEWS_SOURCES)} feeds", ", ".join(s.name for s in NEWS_SOURCES))
    table.add_row(
        "Run caps",
        "✓ Active",
        f"{settings.max_articles} articles, {settings.max_claims} claims, "
        f"{settings.llm_min_interval}s between calls",
    )
    table.add_row(
        "Publishing",
        "Auto" if settings.auto_publish else "Review",
        "approved on generation" if settings.auto_publish else "drafts await approval",
    )
    table.add_row(
        "Claim store",
        "✓ Persistent" if settings.store_path else "⚠ Memory only",
        f"{approved} live, {len(drafts)} drafts, {len(reported)} reported",
    )
    table.add_row("Logging", "✓ Active", f"Level: {settings.log_level}, Format: {settings.log_format}")

    console.print(table)


@app.command()
def run(
    publish: Optional[bool] = typer.Option(
        None,
        "--publish/--draft",
        help="Publish directly or stage drafts (default from AUTO_PUBLISH)",
    ),
) -> None:
    """Run one claim generation pass over all configured feeds."""
    from newsquiz_system.llm.gemini_client import GeminiClient
    from newsquiz_system.pipelines.generation_pipeline import ClaimGenerationPipeline

    try:
        generator = GeminiClient()
    except ConfigurationError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(2)

    store = _open_store()
    pipeline = ClaimGenerationPipeline(generator=generator, store=store, auto_publish=publish)

    console.print("[bold cyan]Generating claims from latest news...[/bold cyan]")
    result = asyncio.run(pipeline.run())

    if not result.success:
        stage = result.failed_stage or result.stage
        console.print(f"\n[red]✗[/red] Run failed at {stage.value}: {result.error}")
        raise typer.Exit(1)

    summary = (
        f"Articles fetched: {result.articles_fetched}\n"
        f"Facts extracted: {result.facts_extracted}\n"
        f"Candidates: {result.candidates_generated} "
        f"({result.candidates_rejected} rejected)\n"
        f"Claims {result.status.value}: {result.claims_published}\n"
        f"Feedback guidance: {'yes' if result.guided else 'none'}\n"
        f"Duration: {result.duration_seconds:.1f}s"
    )
    console.print(Panel(summary, title="Run complete", border_style="green"))


@app.command("next-claims")
def next_claims(
    limit: int = typer.Option(10, help="Number of claims to show"),
    mark_shown: bool = typer.Option(False, help="Increment the shown counter"),
) -> None:
    """Show the least-exposed approved claims, as served to players."""
    store = _open_store()
    claims = asyncio.run(store.select_low_exposure_approved(limit))
    if mark_shown:
        for claim in claims:
            asyncio.run(store.increment_shown(claim.id))
    console.print(_claims_table("Next claims", claims))


@app.command()
def reported(limit: int = typer.Option(20, help="Number of claims to show")) -> None:
    """List reported claims, most reported first."""
    store = _open_store()
    claims = asyncio.run(store.select_reported(min_report_count=1, limit=limit))
    if not claims:
        console.print("[dim]No reported claims.[/dim]")
        return
    console.print(_claims_table("Reported claims", claims))


@app.command()
def guidance() -> None:
    """Preview the feedback guidance the next run will use."""
    from newsquiz_system.agents.sifters.feedback_aggregator import FeedbackAggregator

    store = _open_store()
    text = asyncio.run(FeedbackAggregator(limit=settings.guidance_limit).load_guidance(store))
    if not text:
        console.print("[dim]No reported claims, synthesis runs unguided.[/dim]")
        return
    console.print(Panel(text.strip(), title="Feedback guidance", border_style="yellow"))


def _mutate(action: str, claim_id: str) -> None:
    store = _open_store()

    async def _apply() -> None:
        full_id = await _resolve_id(store, claim_id)
        operation = {
            "shown": store.increment_shown,
            "report": store.increment_reported,
            "delete": store.delete_by_id,
            "clear-reports": store.clear_report_count,
            "approve": store.approve_draft,
        }[action]
        await operation(full_id)

    try:
        asyncio.run(_apply())
    except StoreError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1)
    logger.info(f"Claim {action} applied", claim_id=claim_id)
    console.print(f"[green]✓[/green] {action}: {claim_id}")


@app.command()
def shown(claim_id: str) -> None:
    """Record that a claim was shown to a player."""
    _mutate("shown", claim_id)


@app.command()
def report(claim_id: str) -> None:
    """Record a player report against a claim."""
    _mutate("report", claim_id)


@app.command()
def delete(
    claim_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Permanently delete a claim."""
    if not yes:
        typer.confirm(f"Delete claim {claim_id} permanently?", abort=True)
    _mutate("delete", claim_id)


@app.command("clear-reports")
def clear_reports(claim_id: str) -> None:
    """Keep a reported claim and reset its report count."""
    _mutate("clear-reports", claim_id)


@app.command()
def drafts() -> None:
    """List draft claims awaiting review."""
    store = _open_store()
    claims = asyncio.run(store.list_drafts())
    if not claims:
        console.print("[dim]No drafts.[/dim]")
        return
    console.print(_claims_table("Draft claims", claims))


@app.command()
def approve(claim_id: str) -> None:
    """Approve a draft claim for play."""
    _mutate("approve", claim_id)


@app.command("purge-manual")
def purge_manual(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete all manually entered claims, keeping generated ones."""
    if not yes:
        typer.confirm("Delete all manually added claims?", abort=True)
    store = _open_store()
    deleted = asyncio.run(store.delete_manual_claims())
    console.print(f"[green]✓[/green] Deleted {deleted} manual claims")


@app.command("test-gemini")
def test_gemini(
    prompt: str = typer.Option(..., prompt="Enter test prompt"),
) -> None:
    """Test Gemini API connection with a simple prompt."""
    from newsquiz_system.llm.gemini_client import GeminiClient

    logger.info("Testing Gemini API connection")
    try:
        client = GeminiClient()
        start_time = time.time()
        response = asyncio.run(client.generate(prompt))
        elapsed = time.time() - start_time
    except Exception as e:
        console.print(f"\n[red]✗[/red] Error: {e}")
        logger.error(f"Gemini API test failed: {e}")
        raise typer.Exit(1)

    display_response = response[:500] + ("..." if len(response) > 500 else "")
    console.print(Panel(display_response, title="Gemini Response", border_style="green"))
    console.print(f"\n[green]✓[/green] Response generated in {elapsed:.2f}s ({len(response)} chars)")


@app.command()
def version() -> None:
    """Display version information."""
    console.print("[bold]News Quiz Claim Generator[/bold]")
    console.print(f"Version: {__version__}")


if __name__ == "__main__":
    app()

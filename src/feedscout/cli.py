"""Command line interface for feedscout."""

import asyncio
import sys
from typing import Annotated, Any, Awaitable, Callable, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from feedscout import __version__
from feedscout.blogrolls import BLOGROLL_METHODS, discover_blogrolls
from feedscout.blogrolls import URI_TIERS as BLOGROLL_URI_TIERS
from feedscout.core.models import DiscoverOptions, DiscoverResult
from feedscout.core.models import Progress as DiscoveryProgress
from feedscout.feeds import FEED_METHODS, discover_feeds
from feedscout.feeds import URI_TIERS as FEED_URI_TIERS
from feedscout.hubs import HUB_METHODS, discover_hubs
from feedscout.logs import setup_logging
from feedscout.platforms import DEFAULT_PLATFORM_HANDLERS

console = Console()

COMMANDS = ("feeds", "blogrolls", "hubs", "platforms")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]feedscout[/bold] version {__version__}")
        raise typer.Exit()


def _normalize_cli_url(url: str) -> str:
    """Prepend ``https://`` to bare hosts.

    Examples:
        example.com -> https://example.com
        http://example.com/blog -> http://example.com/blog
    """
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url


def _build_methods(
    methods: Optional[list[str]],
    tier: Optional[str],
    default_methods: tuple[str, ...],
    uri_tiers: dict[str, tuple[str, ...]],
) -> Optional[dict[str, Any]]:
    """Map ``--method`` and ``--tier`` flags onto a methods config.

    Returns:
        None to keep the product defaults, otherwise a methods mapping.

    Raises:
        typer.BadParameter: If the tier is unknown.
    """
    if not methods and tier is None:
        return None

    config: dict[str, Any] = {name: True for name in (methods or default_methods)}

    if tier is not None:
        if tier not in uri_tiers:
            raise typer.BadParameter(
                f"Unknown tier {tier!r}, expected one of: {', '.join(uri_tiers)}",
                param_hint="--tier",
            )
        if "guess" in config:
            config["guess"] = {"uris": uri_tiers[tier]}

    return config


async def _run_with_progress(
    discover_fn: Callable[..., Awaitable[list[DiscoverResult]]],
    url: str,
    options: DiscoverOptions,
    quiet: bool,
) -> list[DiscoverResult]:
    """Run a discovery call, feeding a Rich progress bar unless quiet."""
    if quiet:
        return await discover_fn(url, options)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("[green]{task.fields[found]} found"),
        console=console,
        transient=True,
    ) as progress:
        task_id = progress.add_task("Fetching page...", total=None, found=0)

        def on_progress(update: DiscoveryProgress) -> None:
            progress.update(
                task_id,
                description=f"Checking {update.current}",
                completed=update.tested,
                total=update.total,
                found=update.found,
            )

        options.on_progress = on_progress
        return await discover_fn(url, options)


def _print_results(results: list[DiscoverResult], kind: str, url: str) -> None:
    if not results:
        console.print(f"[yellow]No {kind} found for {url}[/yellow]")
        return

    table = Table(
        title=f"[bold]Discovered {kind}[/bold]",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("URL", style="green")
    table.add_column("Details", style="yellow")

    for result in results:
        if not result.is_valid:
            reason = repr(result.error) if result.error is not None else "invalid"
            table.add_row(f"[dim]{result.url}[/dim]", f"[red]{reason}[/red]")
            continue

        data = result.data
        details = [getattr(data, "format", None), getattr(data, "title", None)]
        table.add_row(result.url, " | ".join(str(item) for item in details if item))

    console.print()
    console.print(table)


def _discover(
    discover_fn: Callable[..., Awaitable[list[DiscoverResult]]],
    kind: str,
    url: str,
    methods: Optional[list[str]],
    tier: Optional[str],
    default_methods: tuple[str, ...],
    uri_tiers: dict[str, tuple[str, ...]],
    concurrency: int,
    stop_on_first: bool,
    include_invalid: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Execute a feed or blogroll discovery command."""
    setup_logging(verbose)
    url = _normalize_cli_url(url)

    try:
        options = DiscoverOptions(
            methods=_build_methods(methods, tier, default_methods, uri_tiers),
            concurrency=concurrency,
            stop_on_first=stop_on_first,
            include_invalid=include_invalid,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    if not quiet:
        console.print()
        console.print(
            Panel(
                f"[bold green]URL:[/bold green] {url}\n"
                f"[bold cyan]Methods:[/bold cyan] {', '.join(methods or default_methods)}\n"
                f"[bold yellow]Concurrency:[/bold yellow] {concurrency}",
                title=f"[bold]feedscout {kind}[/bold]",
                border_style="blue",
            )
        )

    try:
        results = asyncio.run(_run_with_progress(discover_fn, url, options, quiet))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"\n[red]Error: {e}[/red]")
        raise typer.Exit(1)

    _print_results(results, kind, url)


app = typer.Typer(
    name="feedscout",
    help="Discover feeds, blogrolls and WebSub hubs of any website.",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.callback()
def callback(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """Discover feeds, blogrolls and WebSub hubs of any website."""


MethodOption = Annotated[
    Optional[list[str]],
    typer.Option(
        "-m",
        "--method",
        help="Discovery method to enable (repeatable) [default: all for the product]",
    ),
]
TierOption = Annotated[
    Optional[str],
    typer.Option(
        "-t",
        "--tier",
        help="Guess tier: minimal, balanced or comprehensive [default: balanced]",
    ),
]
ConcurrencyOption = Annotated[
    int,
    typer.Option("-c", "--concurrency", help="Candidates validated at the same time"),
]
StopOnFirstOption = Annotated[
    bool,
    typer.Option("--stop-on-first", help="Stop scheduling once a result is found"),
]
IncludeInvalidOption = Annotated[
    bool,
    typer.Option("--include-invalid", help="Also list candidates that failed validation"),
]
VerboseOption = Annotated[bool, typer.Option("-v", "--verbose", help="Verbose output")]
QuietOption = Annotated[
    bool,
    typer.Option("-q", "--quiet", help="Suppress panels and progress bar (for scripting/CI)"),
]


@app.command()
def feeds(
    url: Annotated[str, typer.Argument(help="Page or site URL (e.g., https://example.com)")],
    method: MethodOption = None,
    tier: TierOption = None,
    concurrency: ConcurrencyOption = 3,
    stop_on_first: StopOnFirstOption = False,
    include_invalid: IncludeInvalidOption = False,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Discover RSS, Atom, RDF and JSON feeds.

    \b
    Examples:
        feedscout feeds https://example.com
        feedscout feeds example.com -m html -m headers
        feedscout feeds https://example.com -t comprehensive --stop-on-first
    """
    _discover(
        discover_feeds,
        "feeds",
        url,
        method,
        tier,
        FEED_METHODS,
        FEED_URI_TIERS,
        concurrency,
        stop_on_first,
        include_invalid,
        verbose,
        quiet,
    )


@app.command()
def blogrolls(
    url: Annotated[str, typer.Argument(help="Page or site URL (e.g., https://example.com)")],
    method: MethodOption = None,
    tier: TierOption = None,
    concurrency: ConcurrencyOption = 3,
    stop_on_first: StopOnFirstOption = False,
    include_invalid: IncludeInvalidOption = False,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Discover OPML blogrolls.

    \b
    Examples:
        feedscout blogrolls https://example.com
        feedscout blogrolls example.com -t minimal
    """
    _discover(
        discover_blogrolls,
        "blogrolls",
        url,
        method,
        tier,
        BLOGROLL_METHODS,
        BLOGROLL_URI_TIERS,
        concurrency,
        stop_on_first,
        include_invalid,
        verbose,
        quiet,
    )


@app.command()
def hubs(
    url: Annotated[str, typer.Argument(help="Page or feed URL")],
    method: Annotated[
        Optional[list[str]],
        typer.Option("-m", "--method", help="Source to read: headers, feed or html (repeatable)"),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Discover WebSub hubs announced by a page or feed.

    \b
    Examples:
        feedscout hubs https://example.com/feed.xml
    """
    setup_logging(verbose)
    url = _normalize_cli_url(url)

    try:
        results = asyncio.run(discover_hubs(url, methods=tuple(method or HUB_METHODS)))
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    except Exception as e:
        console.print(f"\n[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not results:
        console.print(f"[yellow]No hubs found for {url}[/yellow]")
        return

    table = Table(title="[bold]WebSub hubs[/bold]", show_header=True, header_style="bold cyan")
    table.add_column("Hub", style="green")
    table.add_column("Topic", style="yellow")
    for result in results:
        table.add_row(result.hub, result.topic)

    console.print()
    console.print(table)


@app.command("platforms")
def platforms() -> None:
    """List the built-in platform handlers in match order."""
    table = Table(
        title="[bold]Platform Handlers[/bold]",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Platform", style="cyan")
    table.add_column("Handler", style="green")

    for position, handler in enumerate(DEFAULT_PLATFORM_HANDLERS, 1):
        table.add_row(str(position), handler.name, type(handler).__name__)

    console.print()
    console.print(table)
    console.print()
    console.print("[dim]The first handler matching a URL wins.[/dim]")


def main() -> None:
    """Main entry point with smart argument handling.

    Allows both:
        feedscout https://example.com
        feedscout feeds https://example.com
    """
    if len(sys.argv) > 1:
        first_arg = sys.argv[1]
        if first_arg not in COMMANDS and not first_arg.startswith("-") and (
            first_arg.startswith(("http://", "https://")) or "." in first_arg
        ):
            sys.argv.insert(1, "feeds")

    app()


if __name__ == "__main__":
    main()

from __future__ import annotations

import json
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .deeplinks import DeepLinkResult, DeepLinkStatus, resolve_deep_link
from .destinations import Destination, all_destination_types
from .logging import setup_logging
from .settings import load_settings
from .state import AppNavigationState, TabSelection

app = typer.Typer(
    add_completion=False,
    help="breitling_nav: navigation routing core for the Breitling app",
    rich_markup_mode="rich",
)
console = Console()


# ═══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def _destination_dict(destination: Optional[Destination]) -> Optional[dict]:
    if destination is None:
        return None
    params = {}
    for name, value in destination.params().items():
        if value is not None and hasattr(value, "__dataclass_fields__"):
            value = repr(value)
        params[name] = value
    return {"kind": destination.kind, "title": destination.title, "params": params}


def _result_dict(result: DeepLinkResult) -> dict:
    return {
        "url": result.url,
        "status": result.status.value,
        "host": result.host,
        "destination": _destination_dict(result.destination),
        "missing_parameter": result.missing_parameter,
        "reason": result.reason,
    }


_STATUS_STYLE = {
    DeepLinkStatus.MATCHED: "green",
    DeepLinkStatus.MISSING_PARAMETER: "yellow",
    DeepLinkStatus.UNRECOGNIZED: "cyan",
    DeepLinkStatus.MALFORMED: "red",
}


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN CALLBACK
# ═══════════════════════════════════════════════════════════════════════════════

@app.callback()
def _root(ctx: typer.Context):
    """
    [bold]breitling_nav[/bold]: inspect destinations and try deep links.

    [bold]Examples:[/bold]
      python -m breitling_nav destinations
      python -m breitling_nav resolve "breitling://product?id=AB0138"
      python -m breitling_nav simulate "breitling://orders" "breitling://order?id=42"
    """
    try:
        settings = load_settings()
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/red]\n{escape(str(exc))}", highlight=False)
        raise typer.Exit(code=2)
    setup_logging(settings)
    ctx.obj = settings


# ═══════════════════════════════════════════════════════════════════════════════
# COMMANDS
# ═══════════════════════════════════════════════════════════════════════════════

@app.command("destinations", help="List every destination with its metadata")
def destinations(
    json_out: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    rows = [
        {
            "kind": cls.kind,
            "title": cls.title,
            "requires_authentication": cls.requires_authentication,
            "is_premium_content": cls.is_premium_content,
        }
        for cls in all_destination_types()
    ]
    if json_out:
        typer.echo(json.dumps(rows, indent=2))
        return

    table = Table(title="Destinations")
    table.add_column("Kind", style="cyan")
    table.add_column("Title")
    table.add_column("Auth", justify="center")
    table.add_column("Premium", justify="center")
    for row in rows:
        table.add_row(
            row["kind"],
            row["title"],
            "✓" if row["requires_authentication"] else "",
            "★" if row["is_premium_content"] else "",
        )
    console.print(table)


@app.command("resolve", help="Resolve a deep link without navigating")
def resolve(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Deep link, e.g. breitling://product?id=AB0138"),
    json_out: bool = typer.Option(False, "--json", help="Print JSON"),
):
    settings = ctx.obj
    result = resolve_deep_link(url, getattr(settings, "BN_DEEP_LINK_SCHEMES", None))

    if json_out:
        typer.echo(json.dumps(_result_dict(result), indent=2))
    else:
        style = _STATUS_STYLE[result.status]
        console.print(f"[{style}]{result.status.value}[/{style}]  {result.url}")
        if result.destination is not None:
            console.print(f"  → {result.destination.title}  [dim]{result.destination!r}[/dim]")
        elif result.missing_parameter:
            console.print(f"  [yellow]missing query parameter:[/yellow] {result.missing_parameter}")
        elif result.status is DeepLinkStatus.UNRECOGNIZED:
            console.print("  [dim]unrecognized host; router returns to root[/dim]")
        elif result.reason:
            console.print(f"  [red]{result.reason}[/red]")

    if result.status is DeepLinkStatus.MALFORMED:
        raise typer.Exit(code=1)


@app.command("simulate", help="Apply deep links in order to a fresh set of tab roots")
def simulate(
    ctx: typer.Context,
    urls: List[str] = typer.Argument(..., help="Deep links to apply in order"),
    tab: Optional[str] = typer.Option(None, "--tab", "-t", help="Tab root to drive"),
    json_out: bool = typer.Option(False, "--json", help="Print JSON"),
):
    state = AppNavigationState.from_settings(ctx.obj)
    if tab:
        try:
            state.select(tab)
        except ValueError:
            choices = ", ".join(t.value for t in TabSelection)
            console.print(f"[red]Unknown tab {tab!r}.[/red] Choose one of: {choices}")
            raise typer.Exit(code=2)

    results = [state.handle_deep_link(u) for u in urls]
    router = state.router

    if json_out:
        typer.echo(
            json.dumps(
                {
                    "tab": state.selected_tab.value,
                    "results": [_result_dict(r) for r in results],
                    "path": [_destination_dict(d) for d in router.path],
                    "breadcrumbs": router.breadcrumbs(),
                },
                indent=2,
            )
        )
        return

    for r in results:
        style = _STATUS_STYLE[r.status]
        console.print(f"[{style}]{r.status.value:<18}[/{style}] {r.url}")
    console.print(f"\n[bold]{state.selected_tab.title}[/bold] depth={router.navigation_depth}")
    console.print(router.breadcrumbs())


def main() -> None:
    app()

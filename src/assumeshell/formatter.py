from rich.console import Console
from rich.markup import escape
from rich.table import Table

from assumeshell.auth import Credentials
from assumeshell.catalog import Catalog
from assumeshell.resolver import ResolvedSession


def make_console(color: bool = True) -> Console:
    """Console for user-facing status lines; plain when color is off."""
    if color:
        return Console(highlight=False)
    return Console(color_system=None, highlight=False)


def print_active(resolved: ResolvedSession, credentials: Credentials | None,
                 console: Console | None = None) -> None:
    """Print what the new shell will run as. Never prints credential values."""
    console = console or make_console()

    if not resolved.profile_name and not resolved.region:
        console.print("[dim]Cleared AWS_PROFILE and AWS_DEFAULT_REGION[/dim]")
        return

    if resolved.profile_name:
        console.print(f"Active Profile: [bold]{escape(resolved.profile_name)}[/bold]")
    console.print(f"Active Region: [bold]{escape(resolved.region)}[/bold]")

    if credentials is not None:
        console.print(f"Assumed Role: [bold cyan]{resolved.role_arn}[/bold cyan]")
    elif resolved.role_arn and resolved.assume_disabled:
        console.print("[dim]Role assumption disabled, using profile credentials[/dim]")


def print_profiles(catalog: Catalog, current: str = "", console: Console | None = None) -> None:
    """Print the catalog as a rich table, in config-file order."""
    console = console or make_console()

    if not len(catalog):
        console.print("\n[yellow]No profiles found in AWS config.[/yellow]\n")
        return

    table = Table(title="AWS Profiles", show_lines=False, title_style="bold cyan")
    table.add_column("#", style="dim", width=4, justify="right")
    table.add_column("Profile", style="bold white")
    table.add_column("Account ID", style="magenta")
    table.add_column("Role", style="cyan")
    table.add_column("Region", style="green")
    table.add_column("Source", style="yellow")

    for idx, p in enumerate(catalog, 1):
        name = f"{p.name} *" if p.name == current else p.name
        table.add_row(
            str(idx),
            escape(name),
            p.account_id or "-",
            p.role_name or "-",
            p.region or (f"({catalog.default_region})" if catalog.default_region else "-"),
            p.source_profile or "-",
        )

    console.print()
    console.print(table)
    console.print(f"\n[bold]{len(catalog)}[/bold] profile(s) found.\n")

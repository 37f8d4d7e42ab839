import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from varpick.application.config import PickerConfig, load_picker_config
from varpick.application.flattener import flatten
from varpick.application.formatter import format_token
from varpick.domain.exceptions import VarpickError
from varpick.logger import get_logger, setup_logger

load_dotenv()

cli = typer.Typer(
    name="varpick",
    help="Browse a variable catalog and insert template tokens into a text editor",
    epilog="""
    Examples:
    $ varpick list catalog.json --include-parents
    $ varpick demo catalog.json --open '${' --close '}'
    """,
    add_completion=False,
)

console = Console()


def _load(
    catalog: Path,
    include_parents: Optional[bool],
    open_token: Optional[str],
    close_token: Optional[str],
) -> PickerConfig:
    token = None
    if open_token is not None or close_token is not None:
        token = {"open": open_token, "close": close_token}
    try:
        return load_picker_config(catalog, include_parent_nodes=include_parents, token=token)
    except (FileNotFoundError, VarpickError) as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(code=1)


@cli.command("list")
def list_variables(
    catalog: Path = typer.Argument(..., help="JSON file with the variable catalog or picker options"),
    include_parents: Optional[bool] = typer.Option(
        None, "--include-parents/--leaves-only", help="Also list entries that have children"
    ),
    open_token: Optional[str] = typer.Option(None, "--open", help="Opening token delimiter"),
    close_token: Optional[str] = typer.Option(None, "--close", help="Closing token delimiter"),
):
    """Print every selectable variable with its group and token."""
    config = _load(catalog, include_parents, open_token, close_token)
    policy = config.token_policy()
    items = flatten(config.catalog, config.include_parent_nodes)

    table = Table(title=f"{len(items)} variable(s)")
    table.add_column("Address", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Group", style="magenta")
    table.add_column("Token", style="green", no_wrap=True)
    for item in items:
        table.add_row(item.address, item.title, item.group.title if item.group else "", format_token(item.address, policy))
    console.print(table)


@cli.command()
def demo(
    catalog: Path = typer.Argument(..., help="JSON file with the variable catalog or picker options"),
    include_parents: Optional[bool] = typer.Option(
        None, "--include-parents/--leaves-only", help="Make entries with children insertable"
    ),
    open_token: Optional[str] = typer.Option(None, "--open", help="Opening token delimiter"),
    close_token: Optional[str] = typer.Option(None, "--close", help="Closing token delimiter"),
    text: str = typer.Option("", "--text", help="Initial editor contents"),
    refocus_editor: bool = typer.Option(False, "--refocus-editor", help="Focus the editor after inserting"),
    debug: bool = typer.Option(os.getenv("VARPICK_DEBUG", "false").lower() == "true", "--debug", help="Enable debug logging"),
):
    """Launch a Textual editor with the variable picker attached."""
    setup_logger(log_level="DEBUG" if debug else "INFO")
    logger = get_logger("main")

    config = _load(catalog, include_parents, open_token, close_token)
    logger.info(f"Starting varpick demo with catalog {catalog}")

    # Imported lazily so `varpick list` does not pay for Textual start-up
    from varpick.presentation.tui import VariablePickerApp

    app = VariablePickerApp(config, text=text, refocus_editor_on_commit=refocus_editor)
    app.run()


def run():
    """Entry point for the varpick CLI."""
    cli()


if __name__ == "__main__":
    run()

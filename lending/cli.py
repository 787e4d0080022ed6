import logging
from typing import Optional

import typer
from rich.console import Console
from rich.tree import Tree

from lending import config
from lending.config import Settings
from lending.scenario import Scenario, ScenarioError, load_scenario
from lending.ui_helpers import (
    get_output_mode,
    print_action_results,
    print_catalog,
    print_roster,
    print_stats_result,
    print_suggestion,
    set_output_mode,
)

APP_NAME = "Lending Library CLI"

console = Console()

app = typer.Typer(help=APP_NAME)


def _load(path: str) -> Scenario:
    """Load a scenario or exit with code 1 and an error message."""
    try:
        return load_scenario(path, config.settings)
    except ScenarioError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log library activity at INFO level"),
):
    """Global CLI options (output mode, logging)."""
    config.settings = Settings.from_env()
    level = "INFO" if verbose else config.settings.log_level
    logging.basicConfig(level=getattr(logging, level, logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")
    set_output_mode(output or config.settings.output_mode)


@app.command("show")
def cli_show(scenario_file: str):
    """Show the catalog, patrons and statistics of a scenario before any action runs."""
    scenario = _load(scenario_file)
    print_catalog(scenario.library)
    print_roster(scenario.library)
    print_stats_result(scenario.library.get_statistics())


@app.command("suggest")
def cli_suggest(scenario_file: str, patron_id: int):
    """Suggest the book a patron will enjoy the most."""
    scenario = _load(scenario_file)
    patron = scenario.library.get_patron(patron_id)
    if patron is None:
        print(f"Patron with id {patron_id} not found.")
        return
    book = scenario.library.suggest_book(patron_id)
    print_suggestion(patron.display_name(), book.title if book else None)


@app.command("borrow")
def cli_borrow(scenario_file: str, book_id: int, patron_id: int):
    """Try a single borrow against the scenario's library and explain the outcome."""
    scenario = _load(scenario_file)
    lib = scenario.library
    refusal = lib.check_borrow(book_id, patron_id)
    if lib.borrow_book(book_id, patron_id):
        print(f"Borrowed: {lib.get_book(book_id).title} -> {lib.get_patron(patron_id).display_name()}")
    else:
        print(f"Borrow refused: {refusal.value}")


@app.command("run")
def cli_run(
    scenario_file: str,
    show_final: bool = typer.Option(False, "--show-final", help="Print the catalog after the last action"),
):
    """Replay the scenario's action script."""
    scenario = _load(scenario_file)
    print_action_results(scenario.run())
    if show_final:
        print_catalog(scenario.library)


@app.command("config")
def cli_config():
    """Show the effective settings."""
    current = config.settings
    if get_output_mode() == "rich":
        tree = Tree("⚙️  Lending Library Settings", style="bold blue")
        for key, value in vars(current).items():
            tree.add(f"[yellow]{key}[/]: [white]{value}[/]")
        console.print(tree)
    else:
        for key, value in vars(current).items():
            print(f"{key} = {value}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

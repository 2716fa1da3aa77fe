"""Main CLI entry point for TradeJournal.

This module provides the main click group and lazy loading
of command modules to keep startup fast.
"""

import importlib
import logging

import click


class LazyGroup(click.Group):
    """A click Group whose commands are imported on first use."""

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(self._lazy_subcommands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Import the module registered for cmd_name and return its command."""
        module_path = self._lazy_subcommands.get(cmd_name)
        if module_path is None:
            return None

        # Attribute names differ from command names (settings_group, calendar_view)
        module = importlib.import_module(module_path)
        for attr in vars(module).values():
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                return attr

        raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")


LAZY_SUBCOMMANDS = {
    "init": "tradejournal.cli.journal",
    "add": "tradejournal.cli.journal",
    "trades": "tradejournal.cli.journal",
    "delete": "tradejournal.cli.journal",
    "stats": "tradejournal.cli.analytics",
    "calendar": "tradejournal.cli.analytics",
    "fitness": "tradejournal.cli.analytics",
    "settings": "tradejournal.cli.settings",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """TradeJournal - personal trading journal with behavioral scoring.

    Log your trades, review P&L statistics and get a monthly
    verdict on whether you should keep trading.

    \b
    Quick Start:
      tradejournal add AAPL --entry 150 --exit 155 --qty 10
      tradejournal stats       # Wallet and goal progress
      tradejournal fitness     # Behavioral verdict for this month
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    ctx.ensure_object(dict)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()

"""Main Click application root."""

from __future__ import annotations

import logging

import click

from orderrouter.cli.commands import catalog_cmd, chat_cmd
from orderrouter.core.config import set_core_config
from orderrouter.core.config.main import Config


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to settings.toml",
)
@click.pass_context
def cli(ctx, verbose, config_path):
    """Orderrouter CLI - conversational ordering assistant."""
    ctx.ensure_object(dict)
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s %(message)s")

    # Suppress verbose HTTP logging from Google API clients
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("google.genai").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    # Defaults < TOML < env
    set_core_config(Config.load(config_path))


cli.add_command(chat_cmd, name="chat")
cli.add_command(catalog_cmd, name="catalog")


if __name__ == "__main__":
    cli()

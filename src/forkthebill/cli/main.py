#!/usr/bin/env python3
"""
Main CLI Entry Point for Fork the Bill

Provides unified command-line interface for splitting shared bills.
"""

import logging
import os

import click

from ..core.config import get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Fork the Bill - split a shared bill item by item

    Create an expense from receipt items, let each person claim what they
    had, and see what everyone owes including their share of tax and tip.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["FORKTHEBILL_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("forkthebill").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = get_config()

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")


@main.command()
def version() -> None:
    """Show version information."""
    from forkthebill import __author__, __version__

    click.echo(f"Fork the Bill v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Store Backend: {config_obj.store.backend.value}")
    click.echo(f"  Expenses Directory: {config_obj.store.expenses_dir}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .expense import expense  # noqa: E402

main.add_command(expense)


if __name__ == "__main__":
    main()

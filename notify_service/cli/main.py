"""Main CLI entry point for notify-service management commands."""

import click

from notify_service import __version__
from notify_service.cli.commands import db, notify, server
from notify_service.infra.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="notify-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Notify Service CLI - dispatch notifications and manage the service.

    \b
    Command Groups:
      notify     Dispatch and classify notifications
      db         Database setup and migrations
      server     Run the HTTP API

    \b
    Quick Start:
      notify-service db init
      notify-service notify classify appointment_reminder
      notify-service notify dispatch usr-1 order_shipped --title "Shipped"
      notify-service server run
    """
    ctx.ensure_object(dict)


cli.add_command(notify.notify)
cli.add_command(db.db)
cli.add_command(server.server)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()

"""CLI command for seeding the default habit catalog.

Usage:
    flask seed-habits
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext


@click.command("seed-habits")
@with_appcontext
def seed_habits_command():
    """Insert any missing default/pre-made habits (ids 1-15)."""
    from habitsync.domains.habits.services import seed_default_habits

    result = seed_default_habits()
    if not result.ok:
        raise click.ClickException(f"Seeding failed: {result.message}")
    if result.value:
        click.echo(f"Seeded {result.value} habits.")
    else:
        click.echo("Habit catalog already complete.")


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(seed_habits_command)

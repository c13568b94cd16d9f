"""CLI command for installing the default habit categories.

Usage:
    flask seed-categories
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext


@click.command("seed-categories")
@with_appcontext
def seed_categories_command():
    """Create (or refresh) the built-in categories."""
    from habitflow.domains.categories.services import DEFAULT_CATEGORIES, seed_default_categories

    created = seed_default_categories()
    click.echo(f"Categories seeded: {created} created, {len(DEFAULT_CATEGORIES) - created} refreshed")


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(seed_categories_command)

# Overview: Flask CLI command groups for bootstrap and back-office maintenance.

# backend/bakery/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create all tables that do not exist yet (use `flask db upgrade` for migrations).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Catalog:
# - python -m flask catalog seed
#   Insert the default bakery catalog when no products exist.
# - python -m flask catalog low-stock
#   List active products below the low-stock threshold.
#
# Users:
# - python -m flask users create-admin --username admin --full-name "Secretaria" --password "..."
#   Create an administrator account (prompts if options are omitted).

import click
from flask.cli import with_appcontext

from .extensions import db
from .errors import DuplicateUsername
from .seed_data import DEFAULT_PRODUCTS
from .services import get_services
from .validation import password_problem


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create missing tables from the model metadata."""
    db.create_all()
    click.echo("PASS Database tables created")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()
    click.echo("BUILD Recreating schema...")
    db.create_all()
    click.echo("PASS Database reset complete")


@click.group('catalog')
def catalog_group():
    """Catalog seeding and inspection."""


@catalog_group.command('seed')
@with_appcontext
def seed_catalog():
    """Insert the default bakery products if the catalog is empty."""
    inserted = get_services().catalog.seed(DEFAULT_PRODUCTS)
    if inserted:
        click.echo(f"PASS Seeded {inserted} products")
    else:
        click.echo("WARN  Products already exist, skipping seed")


@catalog_group.command('low-stock')
@with_appcontext
def low_stock():
    """List active products below the low-stock threshold."""
    products = get_services().catalog.low_stock_products()
    if not products:
        click.echo("No low-stock products")
        return
    for p in products:
        click.echo(f"{p.id:>5}  stock={p.stock:<3}  {p.name}")


@click.group('users')
def users_group():
    """User bootstrap commands."""


@users_group.command('create-admin')
@click.option('--username', prompt=True)
@click.option('--full-name', prompt=True)
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@with_appcontext
def create_admin(username, full_name, password):
    """Create an administrator account."""
    problem = password_problem(password)
    if problem:
        raise click.BadParameter(problem, param_hint="--password")
    try:
        user = get_services().credentials.create_admin(
            username=username,
            password=password,
            full_name=full_name,
        )
    except DuplicateUsername as e:
        raise click.ClickException(str(e))
    click.echo(f"PASS Created admin: {user.username} (ID: {user.id})")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(catalog_group)
    app.cli.add_command(users_group)

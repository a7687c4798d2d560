"""
Maintenance commands for the story database.
"""
from __future__ import annotations

import asyncio
import sys

import click
from dotenv import load_dotenv

from storyhub.config import get_settings
from storyhub.logging_config import setup_logging
from storyhub.database.connection import close_mongo_connection, connect_to_mongo
from storyhub.database.models.admins import AdminDatabase
from storyhub.database.models.story import StoryDatabase
from storyhub.database.models.submissions import SubmissionDatabase
from storyhub.database.models.visitors import VisitorDatabase
from storyhub.migrations.setup import ensure_collections
from storyhub.scripts.fix_corrupted_stories import run_repair
from storyhub.scripts.sample_data import remove_sample_data, seed_database
from storyhub.services.repair_service import StoryRepairService


def _run(task):
    """Connect, run an async task against the database, disconnect"""
    async def runner():
        settings = get_settings()
        mongodb = await connect_to_mongo(settings.mongodb_uri, settings.database_name)
        try:
            return await task(mongodb.database)
        finally:
            await close_mongo_connection(mongodb)

    return asyncio.run(runner())


@click.group()
@click.option("--verbose", is_flag=True, help="Log database activity.")
def cli(verbose: bool):
    load_dotenv()
    setup_logging("INFO" if verbose else "WARNING", log_file="")


@cli.command("setup-db")
def setup_db():
    """Create collections and indexes."""
    ok = _run(ensure_collections)
    click.echo("Database setup completed!" if ok else "Database setup failed, see the log.")
    if not ok:
        sys.exit(1)


@cli.command("seed")
def seed():
    """Insert the sample stories and user."""
    async def task(database):
        return await seed_database(StoryDatabase(database), VisitorDatabase(database))

    counts = _run(task)
    click.echo(f"Added {counts['stories']} stories and {counts['users']} users.")


@cli.command("remove-samples")
def remove_samples():
    """Delete the sample stories and user created by `seed`."""
    async def task(database):
        return await remove_sample_data(StoryDatabase(database), VisitorDatabase(database))

    counts = _run(task)
    click.echo(f"Removed {counts['stories']} sample stories.")
    click.echo(f"Removed {counts['users']} sample users.")


@cli.command("create-admin")
@click.argument("username")
@click.password_option()
def create_admin(username: str, password: str):
    """Create an admin account that can log into the dashboard."""
    from storyhub.routers.auth import get_password_hash

    if len(password) < 8:
        click.echo("Password should be at least 8 characters.")
        sys.exit(1)

    async def task(database):
        return await AdminDatabase(database).create_admin(username, get_password_hash(password))

    result = _run(task)
    if not result["success"]:
        click.echo(f"{result['message']}. Try a different username.")
        sys.exit(1)

    click.echo("Admin user created successfully!")
    click.echo(f"Admin ID: {result['admin_id']}")


@cli.command("fix-corrupted")
@click.option("--dry-run", is_flag=True, help="Only list corrupted stories.")
def fix_corrupted(dry_run: bool):
    """Find stories with unreadable content and restore them from their submissions."""
    async def task(database):
        service = StoryRepairService(StoryDatabase(database), SubmissionDatabase(database))
        return await run_repair(service, click.echo, dry_run=dry_run)

    _run(task)


if __name__ == "__main__":  # pragma: no cover
    cli()

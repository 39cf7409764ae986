"""Database setup and seeding commands."""

import asyncio
import sys

import cyclopts

from geocidades.cli.console import get_console
from geocidades.config import Config, configure_logging
from geocidades.domain.shared.error import ValidationError
from geocidades.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    create_tables,
)
from geocidades.infrastructure.persistence.migrate import run_migrations
from geocidades.infrastructure.persistence.seed import (
    DEMO_PASSWORD,
    ensure_superadmin,
    seed_demo_users,
)

app = cyclopts.App(name="db", help="Database management commands")


def _load_config() -> Config:
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)
    return config


@app.command
def migrate() -> None:
    """Apply pending database migrations."""
    config = _load_config()
    run_migrations(config.database.url)
    get_console().success("Database is up to date")


async def _seed(config: Config, password: str) -> list[str]:
    engine = create_db_engine(config)
    if config.database.auto_migrate:
        await create_tables(engine)
    try:
        async with create_session_factory(engine)() as session:
            created = await seed_demo_users(session, password)
            await session.commit()
        return created
    finally:
        await engine.dispose()


@app.command
def seed(password: str = DEMO_PASSWORD) -> None:
    """Create the demo administrator accounts. Existing emails are skipped.

    Args:
        password: Password for every demo account.
    """
    console = get_console()
    config = _load_config()
    try:
        created = asyncio.run(_seed(config, password))
    except ValidationError as e:
        console.error(e.message)
        sys.exit(1)

    if not created:
        console.info("All demo users already exist")
        return
    console.table(
        [{"email": email} for email in created],
        [("email", "Email")],
        title=f"Created {len(created)} demo user(s)",
    )


async def _create_superadmin(config: Config, email: str, password: str, full_name: str) -> bool:
    engine = create_db_engine(config)
    if config.database.auto_migrate:
        await create_tables(engine)
    try:
        async with create_session_factory(engine)() as session:
            created = await ensure_superadmin(session, email, password, full_name)
            await session.commit()
        return created
    finally:
        await engine.dispose()


@app.command(name="create-superadmin")
def create_superadmin(email: str, password: str, full_name: str = "Superadmin") -> None:
    """Bootstrap a superadmin account.

    Args:
        email: Login email.
        password: Login password (at least 6 characters).
        full_name: Display name.
    """
    console = get_console()
    config = _load_config()
    try:
        created = asyncio.run(_create_superadmin(config, email, password, full_name))
    except ValidationError as e:
        console.error(e.message)
        sys.exit(1)

    if created:
        console.success(f"Superadmin created: {email}")
    else:
        console.warning(f"A user with email {email} already exists")

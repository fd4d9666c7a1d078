"""Operator CLI for verse accounts (`verse-auth`).

This module is the composition root: the lockout policy and the bcrypt
work factor come from settings here and nowhere else.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import typer
from rich.console import Console

from verse_auth.exceptions import AuthError, InvalidCredentialsError
from verse_auth.logging_config import configure_logging
from verse_auth.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    create_engine,
    create_session_factory,
    create_tables,
)
from verse_auth.schemas import Account, LockoutPolicy
from verse_auth.services import (
    AccountLockoutGuard,
    AuthenticationService,
    PasswordHashingService,
)
from verse_auth.time import utc_now
from verse_config import Settings, get_settings

app = typer.Typer(help="Manage verse accounts.", no_args_is_help=True)
console = Console(highlight=False)


@dataclass
class _Services:
    repository: AccountRepositorySQLAlchemy
    auth: AuthenticationService


def build_authentication_service(
    repository: AccountRepositorySQLAlchemy,
    settings: Settings,
) -> AuthenticationService:
    password_service = PasswordHashingService(rounds=settings.password_hash_rounds)
    policy = LockoutPolicy(
        max_attempts=settings.lockout_max_attempts,
        lock_duration=settings.lockout_duration,
    )
    guard = AccountLockoutGuard(repository, password_service, policy)
    return AuthenticationService(repository, guard, password_service)


@asynccontextmanager
async def _services() -> AsyncIterator[_Services]:
    """Open one transaction; it commits when the block exits cleanly."""
    settings = get_settings()
    engine = create_engine(settings)
    try:
        await create_tables(engine)
        session_factory = create_session_factory(engine)
        async with session_factory() as session, session.begin():
            repository = AccountRepositorySQLAlchemy(session)
            yield _Services(
                repository=repository,
                auth=build_authentication_service(repository, settings),
            )
    finally:
        await engine.dispose()


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]{message}[/red]")
    return typer.Exit(code=1)


@app.callback()
def main() -> None:
    configure_logging()


@app.command("init-db")
def init_db() -> None:
    """Create the account tables (safe to run repeatedly)."""

    async def _run() -> None:
        engine = create_engine(get_settings())
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    console.print("[green]Database ready.[/green]")


@app.command()
def register(
    username: str,
    password: str = typer.Option(
        ...,
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
    ),
) -> None:
    """Create a new account."""

    async def _run() -> Account:
        async with _services() as services:
            return await services.auth.register(username, password)

    try:
        account = asyncio.run(_run())
    except AuthError as e:
        raise _fail(e.message) from e
    except ValueError as e:
        raise _fail(str(e)) from e

    console.print(f"[green]Registered {account.account_id}.[/green]")


@app.command()
def login(
    username: str,
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Check a username and password, counting failures like a real login."""

    async def _run() -> Account | None:
        async with _services() as services:
            # Swallowed inside the transaction so the failure count commits
            try:
                return await services.auth.login(username, password)
            except InvalidCredentialsError:
                return None

    try:
        account = asyncio.run(_run())
    except AuthError as e:
        raise _fail(e.message) from e

    if account is None:
        raise _fail(InvalidCredentialsError().message)
    console.print(f"[green]Authenticated as {account.account_id}.[/green]")


@app.command()
def status(username: str) -> None:
    """Show the failed-attempt counter and lock state of an account."""

    async def _run() -> Account | None:
        async with _services() as services:
            return await services.repository.find_by_account_id(username.strip())

    try:
        account = asyncio.run(_run())
    except AuthError as e:
        raise _fail(e.message) from e

    if account is None:
        raise _fail(f"No account named {username}")

    console.print(f"Account:         {account.account_id}")
    console.print(f"Failed attempts: {account.login_attempts}")
    if account.is_locked(utc_now()):
        console.print(f"Locked until:    {account.lock_until.isoformat()}")
    else:
        console.print("Locked until:    not locked")

"""Shelfmark CLI — manage your bookmarks from the terminal.

Usage:
    shelfmark signup --fname Ada --lname Lovelace --email ada@example.com
    shelfmark signin --email ada@example.com     # prints a token
    export SHELFMARK_TOKEN=<token>
    shelfmark whoami
    shelfmark list
    shelfmark add --title "Docs" --link https://example.com
    shelfmark show <id>
    shelfmark edit <id> --title "New title"
    shelfmark rm <id>
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import os
import sys
from typing import Optional

import click
import httpx

from shelfmark import __version__

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8000"


def _api_url() -> str:
    return os.environ.get("SHELFMARK_API_URL", DEFAULT_API_URL).rstrip("/")


def _client() -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the Shelfmark backend."""
    return httpx.AsyncClient(base_url=_api_url(), timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Falls back to a worker thread when an event loop is already running
    (e.g. Click's CliRunner invoked from an async test).
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _auth_headers(token: Optional[str]) -> dict[str, str]:
    tok = token or os.environ.get("SHELFMARK_TOKEN")
    if not tok:
        click.secho(
            "Error: --token required (or set SHELFMARK_TOKEN env var)",
            fg="red",
            err=True,
        )
        sys.exit(1)
    return {"Authorization": f"Bearer {tok}"}


def _check(r: httpx.Response) -> None:
    """Exit with the API's error message on a non-2xx response."""
    if r.is_success:
        return
    try:
        detail = r.json().get("detail", r.text)
    except ValueError:
        detail = r.text
    click.secho(f"Error ({r.status_code}): {detail}", fg="red", err=True)
    sys.exit(1)


def _pretty_json(data: dict | list) -> str:
    return json.dumps(data, indent=2, default=str)


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(
            str(row.get(k) if row.get(k) is not None else "—")[:w].ljust(w)
            for _, k, w in columns
        )
        click.echo(line)


def _fields(title: Optional[str], description: Optional[str],
            link: Optional[str]) -> dict:
    """Only send the fields the user actually passed."""
    body = {"title": title, "description": description, "link": link}
    return {k: v for k, v in body.items() if v is not None}


token_option = click.option(
    "--token", help="Bearer token (or set SHELFMARK_TOKEN)"
)
json_option = click.option("--json", "as_json", is_flag=True, help="Output raw JSON")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="shelfmark")
def main():
    """Shelfmark — personal bookmarks from the command line."""


# ---------------------------------------------------------------------------
# Account
# ---------------------------------------------------------------------------


@main.command()
@click.option("--fname", required=True, help="First name")
@click.option("--lname", required=True, help="Last name")
@click.option("--email", required=True, help="Email address")
@click.password_option()
def signup(fname: str, lname: str, email: str, password: str):
    """Create an account."""
    _run(_signup_impl(fname, lname, email, password))


async def _signup_impl(fname: str, lname: str, email: str, password: str):
    async with _client() as c:
        r = await c.post("/api/v1/auth/signup", json={
            "fname": fname,
            "lname": lname,
            "email": email,
            "password": password,
        })
        _check(r)
        click.secho(f"Account created for {r.json()['email']}", fg="green")


@main.command()
@click.option("--email", required=True, help="Email address")
@click.option("--password", prompt=True, hide_input=True)
def signin(email: str, password: str):
    """Sign in and print a bearer token."""
    _run(_signin_impl(email, password))


async def _signin_impl(email: str, password: str):
    async with _client() as c:
        r = await c.post("/api/v1/auth/signin", json={
            "email": email,
            "password": password,
        })
        _check(r)
        data = r.json()
        click.secho(data["msg"], fg="green", err=True)
        click.echo(data["token"])


@main.command()
@token_option
def whoami(token: Optional[str]):
    """Show the account the token belongs to."""
    _run(_whoami_impl(token))


async def _whoami_impl(token: Optional[str]):
    headers = _auth_headers(token)
    async with _client() as c:
        r = await c.get("/api/v1/users/me", headers=headers)
        _check(r)
        me = r.json()
        click.echo(f"{me['fname']} {me['lname']} <{me['email']}>")
        click.echo(f"id: {me['user_id']}")


# ---------------------------------------------------------------------------
# Bookmarks
# ---------------------------------------------------------------------------


@main.command(name="list")
@token_option
@json_option
def list_cmd(token: Optional[str], as_json: bool):
    """List your bookmarks."""
    _run(_list_impl(token, as_json))


async def _list_impl(token: Optional[str], as_json: bool):
    headers = _auth_headers(token)
    async with _client() as c:
        r = await c.get("/api/v1/bookmarks", headers=headers)
        _check(r)
        bookmarks = r.json()

    if as_json:
        click.echo(_pretty_json(bookmarks))
        return
    if not bookmarks:
        click.echo("No bookmarks yet.")
        return
    _print_table(bookmarks, [
        ("ID", "id", 36),
        ("TITLE", "title", 30),
        ("LINK", "link", 40),
    ])


@main.command()
@click.argument("bookmark_id")
@token_option
def show(bookmark_id: str, token: Optional[str]):
    """Show one bookmark."""
    _run(_show_impl(bookmark_id, token))


async def _show_impl(bookmark_id: str, token: Optional[str]):
    headers = _auth_headers(token)
    async with _client() as c:
        r = await c.get(f"/api/v1/bookmarks/{bookmark_id}", headers=headers)
        _check(r)
        click.echo(_pretty_json(r.json()))


@main.command()
@click.option("--title", help="Bookmark title")
@click.option("--description", help="Free-form description")
@click.option("--link", help="URL")
@token_option
def add(title: Optional[str], description: Optional[str], link: Optional[str],
        token: Optional[str]):
    """Create a bookmark."""
    _run(_add_impl(_fields(title, description, link), token))


async def _add_impl(body: dict, token: Optional[str]):
    headers = _auth_headers(token)
    async with _client() as c:
        r = await c.post("/api/v1/bookmarks", json=body, headers=headers)
        _check(r)
        click.secho(f"Created bookmark {r.json()['id']}", fg="green")


@main.command()
@click.argument("bookmark_id")
@click.option("--title", help="New title")
@click.option("--description", help="New description")
@click.option("--link", help="New URL")
@token_option
def edit(bookmark_id: str, title: Optional[str], description: Optional[str],
         link: Optional[str], token: Optional[str]):
    """Update only the given fields of a bookmark."""
    _run(_edit_impl(bookmark_id, _fields(title, description, link), token))


async def _edit_impl(bookmark_id: str, body: dict, token: Optional[str]):
    headers = _auth_headers(token)
    async with _client() as c:
        r = await c.patch(
            f"/api/v1/bookmarks/{bookmark_id}", json=body, headers=headers
        )
        _check(r)
        click.secho(f"Updated bookmark {bookmark_id}", fg="green")


@main.command()
@click.argument("bookmark_id")
@token_option
def rm(bookmark_id: str, token: Optional[str]):
    """Delete a bookmark."""
    _run(_rm_impl(bookmark_id, token))


async def _rm_impl(bookmark_id: str, token: Optional[str]):
    headers = _auth_headers(token)
    async with _client() as c:
        r = await c.delete(f"/api/v1/bookmarks/{bookmark_id}", headers=headers)
        _check(r)
        click.secho(f"Deleted bookmark {bookmark_id}", fg="green")


if __name__ == "__main__":
    main()

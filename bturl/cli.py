"""Typer CLI entrypoint."""

from __future__ import annotations

import logging

import typer

from bturl.core.errors import BturlError
from bturl.core.service import URLService

app = typer.Typer(help="Parse and organize Bluetooth resource URLs")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def _build_service() -> URLService:
    service = URLService()
    for warning in getattr(service, "load_warnings", ()):
        typer.echo(f"Warning: {warning}", err=True)
    return service


@app.command("parse")
def parse_url(url: str) -> None:
    """Show the normalized form and components of URL."""
    try:
        service = _build_service()
        description = service.describe(service.resolve(url))
        typer.echo(str(description.url))
        typer.echo(f"  level: {description.level}")
        for name, value in description.components:
            typer.echo(f"  {name}: {value}")
    except BturlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("parent")
def show_parent(url: str) -> None:
    """Print the URL one level up, or <none>."""
    try:
        service = _build_service()
        parent = service.resolve(url).parent()
        typer.echo(str(parent) if parent is not None else "<none>")
    except BturlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("sort")
def sort_urls(urls: list[str]) -> None:
    """Print URLs in sort order."""
    try:
        service = _build_service()
        for url in service.sort(service.resolve_many(urls)):
            typer.echo(str(url))
    except BturlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("filter")
def filter_urls(scope: str, urls: list[str]) -> None:
    """Print the URLs located under SCOPE."""
    try:
        service = _build_service()
        for url in service.descendants(service.resolve(scope), service.resolve_many(urls)):
            typer.echo(str(url))
    except BturlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("check")
def check_descendant(descendant: str, ancestor: str) -> None:
    """Exit with 0 if DESCENDANT is located under ANCESTOR, 1 otherwise."""
    try:
        service = _build_service()
        is_descendant = service.resolve(descendant).is_descendant_of(service.resolve(ancestor))
    except BturlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None

    typer.echo("yes" if is_descendant else "no")
    if not is_descendant:
        raise typer.Exit(code=1)


@app.command("aliases")
def list_aliases() -> None:
    """List configured URL aliases."""
    try:
        service = _build_service()
        aliases = service.list_aliases()
        if not aliases:
            typer.echo("No aliases configured")
            return

        for alias in aliases:
            typer.echo(f"@{alias.name}: {alias.url}")
            if alias.description:
                typer.echo(f"  {alias.description}")
    except BturlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()

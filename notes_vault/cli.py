from __future__ import annotations

from pathlib import Path

import typer

from .app import run as app_run
from .config import Settings
from .errors import VaultError

app = typer.Typer(help="Notes & password vault", add_completion=False)


@app.command()
def run(
    vault_path: Path | None = typer.Option(None, help="Vault file location"),
    verbose: bool = typer.Option(False, help="Print effective settings"),
) -> None:
    """Run an interactive vault session."""
    overrides: dict[str, object] = {}
    if vault_path is not None:
        overrides["vault_path"] = vault_path
    settings = Settings(**overrides)
    if verbose:
        typer.echo(settings.model_dump_json(indent=2))
    try:
        app_run(settings=settings)
    except VaultError as exc:
        typer.echo("")
        typer.echo(f"❌ Error: {exc}")
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":  # pragma: no cover
    app()

"""CLI entry point for orca."""

import typer

from .samples import app as samples_app

app = typer.Typer()
app.add_typer(samples_app, name="samples", help="Run the bundled sample pipelines.")

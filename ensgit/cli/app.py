from __future__ import annotations

import typer

from ensgit.cli.commands.ensembl import ensembl


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command()(ensembl)


def main() -> None:
    app()

#!/usr/bin/env python3
"""
Résumé Builder CLI

Resolves a person YAML record (GitHub projects, citations) and prints the
rendered HTML résumé to stdout. Diagnostics go to stderr; set VITAE_LOG_LEVEL
to control their verbosity.

Examples:\n

    vitae person.yaml > resume.html

    VITAE_LOG_LEVEL=DEBUG vitae person.yaml > resume.html
"""

import os
from pathlib import Path

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.citations import HttpTransport
from vitae.contexts.intake import build_person
from vitae.contexts.projects import GitHubProjectSource
from vitae.contexts.rendering import ResumeRenderer, render_resume
from vitae.utils.cache import YAMLFileCache
from vitae.utils.exceptions import VitaeError
from vitae.utils.logger import setup_logger

load_dotenv()
CACHE_DIR = os.getenv("VITAE_CACHE_DIR")


def cache_dir_for(input_file: Path) -> Path:
    """Cache directory: VITAE_CACHE_DIR, or .vitae-cache beside the input."""
    if CACHE_DIR:
        return Path(CACHE_DIR)
    return input_file.parent / ".vitae-cache"


app = typer.Typer(
    help="Build an HTML résumé from a person YAML record",
    add_completion=False,
)


@app.command()
def main(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Person YAML record",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
):
    """
    Resolve and render a résumé.

    Examples:\n

        $ vitae person.yaml > resume.html
    """
    setup_logger(context_name="build", extra_provenance={"Input": input_file})

    try:
        person = build_person(
            input_file,
            cache=YAMLFileCache(cache_dir_for(input_file)),
            project_source=GitHubProjectSource(),
            transport=HttpTransport(),
        )
        html = render_resume(person, ResumeRenderer())
    except VitaeError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(html)


if __name__ == "__main__":
    app()

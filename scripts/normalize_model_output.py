#!/usr/bin/env python3
"""
Normalize saved model output into a canonical resume record.

Recovers the JSON object from a file of raw LLM output (markdown fences,
surrounding prose and raw newlines are tolerated), validates it, and prints
the canonical record as JSON.

Exit codes:
    0  record produced (a warning is printed if it has too little data)
    2  no JSON object could be recovered
    3  recovered value is not a resume object

Usage:
    python scripts/normalize_model_output.py outs/raw_response.txt
    python scripts/normalize_model_output.py outs/raw_response.txt --output resume.json
"""

import json
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from atsforge.contexts.intake import (
    InvalidInputError,
    has_minimum_resume_data,
    validate_resume,
)
from atsforge.utils.json_extraction import extract_json_object

app = typer.Typer(help="Normalize saved model output into a resume record.", add_completion=False)


@app.command()
def main(
    input_file: Annotated[
        Path,
        typer.Argument(help="File containing raw model output", exists=True, dir_okay=False),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write JSON here instead of stdout", dir_okay=False),
    ] = None,
):
    """Extract, validate, and print a canonical resume record."""
    parsed = extract_json_object(input_file.read_text(encoding="utf-8"))
    if parsed is None:
        typer.echo("ERROR: Could not extract any structured data", err=True)
        raise typer.Exit(2)

    try:
        record = validate_resume(parsed)
    except InvalidInputError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(3)

    if not has_minimum_resume_data(record):
        typer.secho("! Extracted data is thin or low-quality", fg=typer.colors.YELLOW, err=True)

    rendered = json.dumps(record.to_dict(), indent=2, ensure_ascii=False)
    if output:
        output.write_text(rendered + "\n", encoding="utf-8")
        typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN, err=True)
    else:
        typer.echo(rendered)


if __name__ == "__main__":
    app()

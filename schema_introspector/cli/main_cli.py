"""
Command line interface for reading database schemas
"""

import json
import logging
from typing import Annotated, Optional

import typer

from ..config import load_connection_config
from ..database import DatabaseFactory, IntrospectionError, Schema, schema_to_dict
from ..reader import SchemaReader
from ..utils.logger import setup_logger
from ..utils.schema_analyzer import SchemaAnalyzer

app = typer.Typer(help="Read a database schema into a canonical, database-agnostic model.")

DbTypeOption = Annotated[
    str,
    typer.Option(
        "--db-type",
        "-d",
        help="Database type: postgresql or mysql. Connection settings come from the environment / .env file.",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        help="Increases the verbosity of the logging feature, to help when troubleshooting issues.",
    ),
]


def _read_schema(db_type: str, verbose: bool) -> Schema:
    setup_logger(level=logging.DEBUG if verbose else logging.INFO)

    try:
        config = load_connection_config(db_type)
        adapter = DatabaseFactory.create_connector(db_type, config)
    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=2)

    try:
        with adapter:
            return SchemaReader(adapter).read_schema()
    except IntrospectionError as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def inspect(
    db_type: DbTypeOption = "postgresql",
    output_file: Annotated[
        Optional[str],
        typer.Option(
            "--output",
            "-o",
            help="File to write the schema JSON to. Prints to stdout when omitted.",
        ),
    ] = None,
    verbose: VerboseOption = False,
):
    """Read the schema and emit it as JSON"""
    schema = _read_schema(db_type, verbose)
    payload = json.dumps(schema_to_dict(schema), indent=2)

    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(payload + "\n")
        typer.echo(f"✅ Wrote {len(schema)} tables to {output_file}", err=True)
    else:
        typer.echo(payload)


@app.command()
def order(
    db_type: DbTypeOption = "postgresql",
    verbose: VerboseOption = False,
):
    """Print tables in the order generated artifacts should be created"""
    schema = _read_schema(db_type, verbose)
    analysis = SchemaAnalyzer().analyze_schema(schema)

    for i, table_name in enumerate(analysis['generation_order'], 1):
        typer.echo(f"{i}. {table_name}")

    for cycle in analysis['circular_references']:
        typer.echo(f"🔁 Circular reference: {' -> '.join(cycle + cycle[:1])}", err=True)


def main():
    app()


if __name__ == "__main__":
    main()

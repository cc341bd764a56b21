"""Command-line interface for gql-payload."""

import json
import logging

import click

from .core.arguments import EnumStrategy
from .core.errors import PayloadError, SchemaError
from .core.ir import OperationDescriptor
from .core.loader import load_descriptors
from .core.parser import SchemaParser
from .core.query_builder import BuilderOptions, QueryBuilder

MODES = ("build", "without-fields", "update", "list", "single", "paginate", "search")

schema_option = click.option(
    "--schema",
    "-s",
    type=click.Path(exists=True),
    help="Path to a GraphQL schema file or directory of .graphqls files.",
)
descriptor_option = click.option(
    "--descriptor",
    "-d",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a JSON file of operation descriptors.",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)


def load_operations(schema: str | None, descriptor: str | None) -> dict[str, OperationDescriptor]:
    """Load descriptors from exactly one of --schema / --descriptor."""
    if bool(schema) == bool(descriptor):
        raise click.UsageError("Pass exactly one of --schema or --descriptor.")
    try:
        if schema:
            return SchemaParser(schema).parse_all()
        return load_descriptors(descriptor)
    except SchemaError as e:
        raise click.ClickException(str(e)) from e


def parse_json_option(value: str | None, name: str):
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise click.UsageError(f"{name} is not valid JSON: {e}") from e


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


@click.group()
@click.version_option(package_name="gql-payload")
def main():
    """Build GraphQL query and mutation strings.

    Render documents from a schema or JSON operation descriptors.
    """
    pass


@main.command()
@schema_option
@descriptor_option
@verbose_option
def operations(schema: str | None, descriptor: str | None, verbose: bool):
    """List the operations a schema or descriptor file defines.

    Examples:

        gql-payload operations --schema ./schema.graphqls
    """
    configure_logging(verbose)
    ops = load_operations(schema, descriptor)
    for name, op in sorted(ops.items()):
        enums = ", ".join(sorted(op.enums))
        line = f"{op.kind.value:<8} {name}"
        if enums:
            line += f"  (enums: {enums})"
        click.echo(line)


@main.command()
@schema_option
@descriptor_option
@click.option("--operation", "-o", required=True, help="Operation name.")
@click.option(
    "--mode",
    "-m",
    type=click.Choice(MODES),
    default="build",
    show_default=True,
    help="Document template to render.",
)
@click.option("--args", "-a", "args_json", help="Arguments as a JSON object.")
@click.option("--fields", "-f", "fields_json", help="Output fields as a JSON object or array.")
@click.option("--id", "record_id", help="Record id for update/single.")
@click.option("--limit", type=int, default=1, show_default=True, help="Page size.")
@click.option("--page", type=int, default=1, show_default=True, help="Page number.")
@click.option(
    "--enum-strategy",
    type=click.Choice([s.value for s in EnumStrategy]),
    default=EnumStrategy.STRUCTURAL.value,
    show_default=True,
    help="How enum arguments are unquoted.",
)
@verbose_option
def render(
    schema: str | None,
    descriptor: str | None,
    operation: str,
    mode: str,
    args_json: str | None,
    fields_json: str | None,
    record_id: str | None,
    limit: int,
    page: int,
    enum_strategy: str,
    verbose: bool,
):
    """Render one GraphQL document and print it.

    Examples:

        gql-payload render -s ./schema.graphqls -o users -a '{"status": "ACTIVE"}'

        gql-payload render -d ./ops.json -o users -m paginate --limit 10 --page 2
    """
    configure_logging(verbose)
    ops = load_operations(schema, descriptor)
    if operation not in ops:
        raise click.ClickException(f"Unknown operation: {operation}")

    arguments = parse_json_option(args_json, "--args") or {}
    fields = parse_json_option(fields_json, "--fields")
    if not isinstance(arguments, dict):
        raise click.UsageError("--args must be a JSON object.")
    if mode in ("update", "single") and record_id is None:
        raise click.UsageError(f"--id is required for mode '{mode}'.")

    builder = QueryBuilder(ops[operation], BuilderOptions(enum_strategy=enum_strategy))
    if verbose:
        click.echo(f"Operation: {builder.kind} {builder.name}", err=True)
        click.echo(f"Enum arguments: {sorted(builder.descriptor.enums)}", err=True)

    try:
        if mode == "build":
            document = builder.build(arguments, fields)
        elif mode == "without-fields":
            document = builder.build_without_fields(arguments)
        elif mode == "update":
            document = builder.build_update(record_id, arguments, fields)
        elif mode == "list":
            document = builder.build_list(fields)
        elif mode == "single":
            document = builder.build_single(record_id, fields)
        elif mode == "paginate":
            document = builder.build_paginate(limit, page, fields)
        else:
            document = builder.build_search(limit, page, arguments, fields)
    except PayloadError as e:
        raise click.ClickException(str(e)) from e

    click.echo(document)


if __name__ == "__main__":
    main()

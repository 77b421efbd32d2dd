"""
Validation Commands
-------------------

Command line interface for validating Hypermark document trees.

Commands:
    - check: Validate one or more tree files against a schema
    - schema: Load a schema file and show what it declares
    - codes: List the diagnostic codes

Exit codes:
    0  every tree is valid
    1  at least one diagnostic was found
    2  a schema or tree file could not be loaded
    3  internal fault while validating (a bug, not a problem in the input)

Usage:
    hmvalidate check article.schema.yaml build/article.json
    hmvalidate check --format json article.schema.yaml build/*.json
    hmvalidate schema article.schema.yaml
    hmvalidate codes
"""
import json
from pathlib import Path
from typing import List, Tuple

import click
import yaml

from hypermark.core.exceptions import InternalFault, SchemaLoadError, TreeLoadError
from hypermark.core.logging_manager import HypermarkLogger, handle_cli_error
from hypermark.core.paths import LOG_DIR


@click.group()
@click.option(
    "--log-dir", type=click.Path(), default=str(LOG_DIR), help="Directory for log files"
)
@click.option("-v", "--verbose", is_flag=True, help="Show tracebacks on errors")
@click.pass_context
def cli(ctx: click.Context, log_dir: str, verbose: bool) -> None:
    """
    Hypermark schema validation.

    Check parsed document trees against a tag schema and report unknown
    tags, misplaced tags, cardinality and argument count violations.
    """
    ctx.ensure_object(dict)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = HypermarkLogger(Path(log_dir) / "operations", "validators")


@cli.command()
@click.argument("schema_path", type=click.Path(exists=True, dir_okay=False))
@click.argument(
    "tree_paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False)
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def check(
    ctx: click.Context, schema_path: str, tree_paths: Tuple[str, ...], output_format: str
) -> None:
    """
    Validate tree files against a schema.

    Every diagnostic is printed as 'Error HM<code>: <message>'. All
    problems in all files are reported, not just the first.
    """
    from hypermark.loaders import load_schema, load_tree
    from hypermark.validators.tree import TreeValidator, ValidationReport

    logger = ctx.obj["logger"]

    try:
        schema = load_schema(Path(schema_path), logger)
    except SchemaLoadError as e:
        handle_cli_error(ctx, e, "load_schema", {"schema": schema_path})

    validator = TreeValidator(schema, logger)
    reports: List[ValidationReport] = []
    for tree_path in tree_paths:
        context = {"schema": schema_path, "tree": tree_path}
        try:
            tree = load_tree(Path(tree_path), logger)
        except TreeLoadError as e:
            handle_cli_error(ctx, e, "load_tree", context)

        try:
            reports.append(validator.validate_report(tree, source=tree_path))
        except InternalFault as e:
            handle_cli_error(ctx, e, "validate_tree", context, exit_code=3)

    if output_format == "json":
        click.echo(json.dumps([report.to_dict() for report in reports], indent=2))
    else:
        for report in reports:
            click.echo(report.format())

    total = sum(report.error_count for report in reports)
    failing = sum(1 for report in reports if not report.is_valid)
    logger.log_info(
        "Validation finished",
        {"files": len(reports), "failing": failing, "errors": total},
    )
    if total:
        raise click.ClickException(
            f"Found {total} validation error(s) in {failing} of {len(reports)} file(s)"
        )


@cli.command()
@click.argument("schema_path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def schema(ctx: click.Context, schema_path: str) -> None:
    """
    Load a schema file and print the rules it declares.
    """
    from hypermark.loaders import load_schema, schema_to_dict

    try:
        loaded = load_schema(Path(schema_path), ctx.obj["logger"])
    except SchemaLoadError as e:
        handle_cli_error(ctx, e, "load_schema", {"schema": schema_path})

    click.echo(f"📋 {len(loaded)} tags in {schema_path}\n")
    click.echo(yaml.safe_dump(dict(schema_to_dict(loaded)), sort_keys=False).rstrip())


@cli.command()
def codes() -> None:
    """
    List diagnostic codes.
    """
    from hypermark.validators.diagnostics import DIAGNOSTIC_TYPES

    for code, diagnostic_type in sorted(DIAGNOSTIC_TYPES.items()):
        summary = (diagnostic_type.__doc__ or "").strip().splitlines()[0]
        click.echo(f"HM{code}  {diagnostic_type.__name__:<24} {summary}")


if __name__ == "__main__":
    cli()

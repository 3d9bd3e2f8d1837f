from pathlib import Path

import click
from datetime import date
from rich import pretty
from rich.console import Console
from rich.table import Table
from textx.exceptions import TextXError

from modelgen.config import load_bundle, load_project_config
from modelgen.context import SqlHelper
from modelgen.errors import GeneratorError
from modelgen.gen_logging import configure_gen_logging
from modelgen.generation import GenerationTask
from modelgen.language import build_model

pretty.install()
console = Console()


def _stamp() -> str:
    return f"[{date.today().strftime('%Y-%m-%d')}]"


def _fail(context, what: str, error: Exception):
    console.print(f"{_stamp()} {what} failed with error(s): {error}", style="red")
    context.exit(1)


def _annotations(attribute) -> str:
    flags = []
    if attribute.key:
        flags.append("@Id")
    if attribute.not_null:
        flags.append("@NotNull")
    if attribute.database_not_null:
        flags.append("@DbNotNull")
    if attribute.auto_incremented:
        flags.append("@AutoIncremented")
    if attribute.long_text:
        flags.append("@LongText")
    if attribute.max_length is not None:
        flags.append(f"@SizeMax({attribute.max_length})")
    if attribute.database_size:
        flags.append(f"@DbSize({attribute.database_size})")
    if attribute.database_type:
        flags.append(f'@DbType("{attribute.database_type}")')
    if attribute.database_name:
        flags.append(f'@DbName("{attribute.database_name}")')
    if attribute.default_value is not None:
        flags.append(f'@DefaultValue("{attribute.default_value}")')
    if attribute.database_default_value is not None:
        flags.append(f'@DbDefaultValue("{attribute.database_default_value}")')
    return ", ".join(flags)


@click.group()
@click.pass_context
def cli(context):
    context.ensure_object(dict)


@cli.command("validate", help="Model Validation")
@click.pass_context
@click.argument("model_path")
def validate(context, model_path):
    try:
        model = build_model(model_path)
    except (TextXError, OSError) as e:
        _fail(context, "Validation", e)
    else:
        console.print(f"{_stamp()} Model validation success! ({len(model.entities)} entities)", style="green")
        context.exit(0)


@cli.command("inspect", help="Parse and print the entities and attributes of a model.")
@click.pass_context
@click.argument("model_path")
def inspect_cmd(context, model_path):
    try:
        model = build_model(model_path)
    except (TextXError, OSError) as e:
        _fail(context, "Inspect", e)
        return

    for entity in model.entities:
        table = Table(title=entity.name, title_justify="left")
        table.add_column("attribute")
        table.add_column("type")
        table.add_column("annotations")
        for attribute in entity.attributes:
            table.add_row(attribute.name, attribute.neutral_type, _annotations(attribute))
        console.print(table)
    context.exit(0)


@cli.command("columns", help="Show the column name, type and constraints of every attribute for a database.")
@click.pass_context
@click.argument("model_path")
@click.option("--database", "-d", required=True, help="Target database (e.g. PostgreSQL).")
@click.option("--config-file", default=None, help="Explicit dialect profile file.")
def columns(context, model_path, database, config_file):
    try:
        model = build_model(model_path)
        sql = SqlHelper(database, config_file)
        tables = []
        for entity in model.entities:
            rows = [
                (sql.column_name(a), sql.column_type(a), sql.column_constraints(a))
                for a in entity.attributes
            ]
            tables.append((sql.table_name(entity), rows))
    except (TextXError, OSError, GeneratorError) as e:
        _fail(context, "Columns", e)
        return

    for table_name, rows in tables:
        table = Table(title=f"{table_name} ({sql.database_name()})", title_justify="left")
        table.add_column("column")
        table.add_column("type")
        table.add_column("constraints")
        for row in rows:
            table.add_row(*row)
        console.print(table)
    context.exit(0)


@cli.command("targets", help="List the target definitions of a bundle.")
@click.pass_context
@click.argument("project_dir")
@click.option("--bundle", "-b", required=True, help="Bundle name (folder under the templates folder).")
def targets(context, project_dir, bundle):
    try:
        config = load_project_config(project_dir)
        definitions = load_bundle(config, bundle)
    except GeneratorError as e:
        _fail(context, "Targets", e)
        return

    table = Table(title=f"Bundle '{bundle}'", title_justify="left")
    for col in ("name", "file", "folder", "template", "scope"):
        table.add_column(col)
    for d in definitions:
        table.add_row(d.name, d.file, d.folder, d.template, d.scope or "-")
    console.print(table)
    context.exit(0)


@cli.command("generate", help="Generate the targets of a bundle for the selected entities.")
@click.pass_context
@click.argument("project_dir")
@click.option("--model", "-m", "model_path", required=True, help="Model file (.model).")
@click.option("--bundle", "-b", required=True, help="Bundle name (folder under the templates folder).")
@click.option("--entity", "-e", "entities", multiple=True, help="Entity to generate (default: all).")
@click.option("--target", "-t", "target_names", multiple=True, help="Target definition name (default: all).")
@click.option("--continue-on-error", is_flag=True, default=False, help="Keep generating after a failed target.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug output.")
@click.option("--quiet", "-q", is_flag=True, default=False, help="Warnings and errors only.")
def generate(context, project_dir, model_path, bundle, entities, target_names, continue_on_error, verbose, quiet):
    configure_gen_logging(verbose=verbose, quiet=quiet)
    try:
        config = load_project_config(project_dir)
        model = build_model(model_path)
        definitions = load_bundle(config, bundle)
        if target_names:
            unknown = sorted(set(target_names) - {d.name for d in definitions})
            if unknown:
                raise click.BadParameter(f"unknown target(s): {', '.join(unknown)}", param_hint="--target")
            definitions = [d for d in definitions if d.name in target_names]

        task = GenerationTask(
            config,
            bundle,
            model,
            selected_entity_names=list(entities) or None,
            definitions=definitions,
        )
        result = task.run(continue_on_error=continue_on_error)
    except (TextXError, GeneratorError, OSError, click.BadParameter) as e:
        _fail(context, "Generation", e)
        return

    out = Path(config.destination_folder)
    if result.ok:
        console.print(f"{_stamp()} Generated {len(result.ledger)} file(s) in {out}", style="green")
        context.exit(0)
    for failure in result.failures:
        console.print(f"  {failure.definition.name}: {failure.error}", style="red")
    console.print(
        f"{_stamp()} Generated {len(result.ledger)} file(s) in {out}, {len(result.failures)} target(s) failed",
        style="yellow",
    )
    context.exit(1)


def main():
    cli(prog_name="modelgen")


if __name__ == "__main__":
    main()

# Copyright 2025 Michael Anckaert
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from schematools import __version__
from schematools.config import SUPPORTED_DIALECTS, Config
from schematools.connectors.database import get_database_connector
from schematools.connectors.file import get_file_connector
from schematools.envfile import azure_to_env, env_to_azure
from schematools.exceptions import ConfigurationException, SchemaToolsException
from schematools.generators import MigrationGenerator, ModelGenerator, SqlGenerator
from schematools.naming import model_name_from_table, table_name_from_path
from schematools.schema import TableSchema

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "schema-tools.yaml"
FILE_TIMESTAMP_FORMAT = "%Y_%m_%d_%H%M%S"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def _setup_logging(level_name: str):
    level = _LEVELS.get(level_name.lower())
    if level is None:
        logger.warning(f"Unknown logging level '{level_name}', defaulting to INFO.")
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _infer(file_path: str, config: Config) -> TableSchema:
    connector = get_file_connector(file_path)
    return connector.infer_schema(config.inference)


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _output_dir(args: argparse.Namespace, config: Config) -> Path:
    return Path(getattr(args, "output_dir", None) or config.output.directory)


def format_schema_table(schema: TableSchema) -> str:
    """Render the inferred columns as a plain-text table."""
    headers = ["Column", "Type", "Length", "Precision", "SQL Definition"]
    rows = [
        [
            name,
            column.type.value,
            "N/A" if column.length is None else str(column.length),
            "N/A" if column.precision is None else str(column.precision),
            column.sql_definition(),
        ]
        for name, column in schema.items()
    ]
    widths = [
        max(len(row[i]) for row in [headers] + rows) for i in range(len(headers))
    ]
    separator = "+" + "+".join("-" * (width + 2) for width in widths) + "+"

    def line(values: list[str]) -> str:
        cells = (f" {value.ljust(width)} " for value, width in zip(values, widths))
        return "|" + "|".join(cells) + "|"

    lines = [separator, line(headers), separator]
    lines.extend(line(row) for row in rows)
    lines.append(separator)
    return "\n".join(lines)


def analyze_command(args: argparse.Namespace, config: Config) -> None:
    schema = _infer(args.file, config)

    if args.format == "json":
        print(json.dumps({name: column.to_dict() for name, column in schema.items()}, indent=4))
        return

    print(f"Analysis of {args.file}:")
    print()
    if not schema:
        print("No columns found.")
        return
    print(format_schema_table(schema))


def generate_command(args: argparse.Namespace, config: Config) -> None:
    table_name = args.table or table_name_from_path(args.file)
    model_name = args.model or model_name_from_table(table_name)
    if not args.table:
        logger.info(f"Using table name: {table_name}")
    if not args.model:
        logger.info(f"Using model name: {model_name}")

    schema = _infer(args.file, config)
    output_dir = _output_dir(args, config)
    timestamps = config.output.timestamps
    stamp = datetime.now().strftime(FILE_TIMESTAMP_FORMAT)

    migration = MigrationGenerator(timestamps=timestamps).generate_migration(table_name, schema)
    path = _write(output_dir / "migrations" / f"{stamp}_create_{table_name}_table.py", migration)
    logger.info(f"Migration created: {path}")

    sql_generator = SqlGenerator(timestamps=timestamps)
    for dialect, sql in sql_generator.generate_all(table_name, schema, config.output.dialects).items():
        path = _write(
            output_dir / "sql" / f"{stamp}_create_{table_name}_table_{dialect}.sql", sql + "\n"
        )
        logger.info(f"SQL file created: {path}")

    model = ModelGenerator(timestamps=timestamps).generate_model(model_name, schema, table_name)
    path = _write(output_dir / "models" / f"{model_name}.py", model)
    logger.info(f"Model created: {path}")


def migration_command(args: argparse.Namespace, config: Config) -> None:
    schema = _infer(args.file, config)
    generator = MigrationGenerator(timestamps=config.output.timestamps)
    migration = generator.generate_migration(args.table, schema, revision=args.revision)

    stamp = datetime.now().strftime(FILE_TIMESTAMP_FORMAT)
    path = _write(
        _output_dir(args, config) / "migrations" / f"{stamp}_create_{args.table}_table.py",
        migration,
    )
    logger.info(f"Migration created: {path}")


def model_command(args: argparse.Namespace, config: Config) -> None:
    schema = _infer(args.file, config)
    generator = ModelGenerator(timestamps=config.output.timestamps)
    model = generator.generate_model(args.model, schema, args.table)

    path = _write(_output_dir(args, config) / "models" / f"{args.model}.py", model)
    logger.info(f"Model created: {path}")


def sql_command(args: argparse.Namespace, config: Config) -> None:
    table_name = args.table or table_name_from_path(args.file)
    schema = _infer(args.file, config)
    dialects = [args.dialect] if args.dialect else config.output.dialects

    statements = SqlGenerator(timestamps=config.output.timestamps).generate_all(
        table_name, schema, dialects
    )
    for dialect, sql in statements.items():
        print(f"-- {dialect}")
        print(sql)
        print()


def apply_command(args: argparse.Namespace, config: Config) -> None:
    if config.destination is None:
        raise ConfigurationException(
            "No destination database configured", operation="apply"
        )

    table_name = args.table or table_name_from_path(args.file)
    schema = _infer(args.file, config)

    connector = get_database_connector(config.destination)
    connector.connect(config.destination)
    try:
        connector.create_table(
            table_name,
            schema,
            replace=args.replace,
            timestamps=config.output.timestamps,
        )
    finally:
        connector.disconnect()


def env_convert_command(args: argparse.Namespace, config: Config) -> None:
    if args.direction == "azure-to-env":
        count = azure_to_env(args.azure_file, args.env_file)
        logger.info(f"Converted {count} settings: {args.azure_file} -> {args.env_file}")
    else:
        count = env_to_azure(args.env_file, args.azure_file)
        logger.info(f"Converted {count} settings: {args.env_file} -> {args.azure_file}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schema-tools",
        description=f"Infer database schemas from sample JSON/CSV data (v{__version__})",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help=f"Path to the configuration file. Defaults to '{DEFAULT_CONFIG_PATH}' when present.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show the version of the tool.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=sorted(_LEVELS),
        help="Override the logging level from the configuration file.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Show the inferred column types of a file.")
    analyze.add_argument("file", help="The JSON/CSV file to analyze")
    analyze.add_argument("--format", choices=["table", "json"], default="table")
    analyze.set_defaults(func=analyze_command)

    generate = subparsers.add_parser(
        "generate", help="Generate migration, SQL and model files from a JSON/CSV file."
    )
    generate.add_argument("file", help="The JSON/CSV file to analyze")
    generate.add_argument("table", nargs="?", help="Table name, defaults to the file name")
    generate.add_argument("model", nargs="?", help="Model name, defaults to the PascalCase table name")
    generate.add_argument("-o", "--output-dir", help="Directory for generated files")
    generate.set_defaults(func=generate_command)

    migration = subparsers.add_parser("migration", help="Generate an Alembic migration.")
    migration.add_argument("file", help="The JSON/CSV file to analyze")
    migration.add_argument("table", help="The table name")
    migration.add_argument("--revision", help="Alembic revision id")
    migration.add_argument("-o", "--output-dir", help="Directory for generated files")
    migration.set_defaults(func=migration_command)

    model = subparsers.add_parser("model", help="Generate a SQLAlchemy model.")
    model.add_argument("file", help="The JSON/CSV file to analyze")
    model.add_argument("model", help="The model name")
    model.add_argument("--table", help="The table name")
    model.add_argument("-o", "--output-dir", help="Directory for generated files")
    model.set_defaults(func=model_command)

    sql = subparsers.add_parser("sql", help="Print CREATE TABLE statements.")
    sql.add_argument("file", help="The JSON/CSV file to analyze")
    sql.add_argument("table", nargs="?", help="Table name, defaults to the file name")
    sql.add_argument("--dialect", choices=SUPPORTED_DIALECTS)
    sql.set_defaults(func=sql_command)

    apply = subparsers.add_parser(
        "apply", help="Create the inferred table in the configured destination database."
    )
    apply.add_argument("file", help="The JSON/CSV file to analyze")
    apply.add_argument("table", nargs="?", help="Table name, defaults to the file name")
    apply.add_argument("--replace", action="store_true", help="Drop an existing table first")
    apply.set_defaults(func=apply_command)

    env_convert = subparsers.add_parser(
        "env-convert", help="Convert between Azure App Settings JSON and .env files."
    )
    env_convert.add_argument("direction", choices=["azure-to-env", "env-to-azure"])
    env_convert.add_argument("--azure-file", default="azure-settings.json")
    env_convert.add_argument("--env-file", default=".env")
    env_convert.set_defaults(func=env_convert_command)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = Config.load(args.config, DEFAULT_CONFIG_PATH)
    except SchemaToolsException as e:
        _setup_logging(args.log_level or "info")
        logger.error(f"Error: {e}")
        return 1

    _setup_logging(args.log_level or config.logging.level)
    logger.debug(f"Parsed arguments: {args}")

    try:
        args.func(args, config)
    except SchemaToolsException as e:
        logger.error(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

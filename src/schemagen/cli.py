import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from schemagen.config.env import get_env_str
from schemagen.config.settings import ArtifactKind, GeneratorConfig, OutputTargets
from schemagen.errors import SchemaGenError
from schemagen.pipeline import generate

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# (flag, artifact, help)
_OUTPUT_FLAGS = (
    ("--ts-out", ArtifactKind.TYPESCRIPT, "Paths to write TypeScript types to"),
    ("--zod-out", ArtifactKind.ZOD, "Paths to write Zod schemas to"),
    ("--convo-out", ArtifactKind.CONVO, "Paths to write Convo-Lang structs to"),
    ("--type-map-out", ArtifactKind.TYPE_MAP, "Paths to write the computed type map to"),
    ("--table-map-out", ArtifactKind.TABLE_MAP, "Paths to write the table map to as JSON"),
    (
        "--ts-table-map-out",
        ArtifactKind.TS_TABLE_MAP,
        "Paths to write the table map to as an exported object",
    ),
    ("--type-list-out", ArtifactKind.TYPE_LIST, "Paths to write the type list to"),
    (
        "--type-list-short-out",
        ArtifactKind.TYPE_LIST_SHORT,
        "Paths to write the type list with props as names only",
    ),
    ("--type-index-out", ArtifactKind.TYPE_INDEX, "Paths to write the type description index to"),
    ("--parsed-sql-out", ArtifactKind.PARSED_SQL, "Paths to write parsed declarations to"),
    ("--barrel-out", ArtifactKind.BARREL, "Paths to write the re-exporting index module to"),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schemagen",
        description="Generate TypeScript, Zod and Convo-Lang types from SQL table declarations",
    )
    parser.add_argument("--sql", nargs="+", action="extend", default=[], help="Inline SQL")
    parser.add_argument(
        "--sql-file", nargs="+", action="extend", default=[], help="SQL files to load"
    )
    parser.add_argument(
        "--type-map-file",
        nargs="+",
        action="extend",
        default=[],
        help="Type map JSON files merged over the defaults, in order",
    )
    parser.add_argument(
        "--clear-type-map",
        action="store_true",
        default=None,
        help="Discard the built-in type mappings",
    )
    parser.add_argument("--insert-suffix", help="Suffix added to insertion types")
    parser.add_argument("--dialect", help="sqlglot dialect of the SQL source (default: postgres)")
    parser.add_argument(
        "--out",
        nargs="+",
        action="extend",
        default=[],
        help="Directories to write every artifact to with default file names",
    )
    for flag, _kind, help_text in _OUTPUT_FLAGS:
        parser.add_argument(flag, nargs="+", action="extend", default=[], help=help_text)
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--silent", action="store_true", help="Only log warnings and errors")
    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.verbose:
        return logging.DEBUG
    if args.silent:
        return logging.WARNING
    configured = (get_env_str("log_level") or "INFO").upper()
    level = logging.getLevelName(configured)
    return level if isinstance(level, int) else logging.INFO


def main(argv: Optional[List[str]] = None) -> None:
    """Run the schema generator CLI."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=_log_level(args), format=LOG_FORMAT)
    logger.debug(f"Arguments: {vars(args)}")

    if not args.sql and not args.sql_file:
        parser.error("at least one of --sql or --sql-file is required")

    try:
        config = GeneratorConfig.from_env(
            insert_suffix=args.insert_suffix,
            clear_type_map=args.clear_type_map,
            type_map_files=args.type_map_file or None,
            dialect=args.dialect,
        )
        targets = OutputTargets.from_options(
            {kind: getattr(args, flag[2:].replace("-", "_")) for flag, kind, _ in _OUTPUT_FLAGS},
            out_dirs=args.out,
        )
        result = generate(config, targets, sql=args.sql, sql_files=args.sql_file)
    except SchemaGenError as e:
        logger.error(f"{e.code.value}: {e.message}")
        sys.exit(1)

    logger.info(f"Generated {len(result.model.records)} types")


if __name__ == "__main__":
    main()

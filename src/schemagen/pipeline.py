"""End-to-end run: read sources, build the type model, render and write artifacts.

Everything that can fail on input (type-map files, source files, tokenizing)
happens before the first write. Artifacts are rendered into memory, written in
parallel, and the barrel module is written only after all of them finished.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from schemagen.builder import BuildContext, build_type_model
from schemagen.config.settings import TS_MODULE_KINDS, ArtifactKind, GeneratorConfig, OutputTargets
from schemagen.emitters import (
    render_barrel,
    render_convo,
    render_declarations,
    render_table_map,
    render_ts_table_map,
    render_type_index,
    render_type_list,
    render_type_map,
    render_typescript,
    render_zod,
)
from schemagen.errors import InputReadError, OutputWriteError
from schemagen.models import TypeModel
from schemagen.parsing.interface import DeclarationParser
from schemagen.parsing.nodes import DeclarationNode
from schemagen.parsing.sqlglot_parser import SqlglotDeclarationParser
from schemagen.type_map import load_type_map_resolver

logger = logging.getLogger(__name__)

SOURCE_SEPARATOR = "\n\n"
_TABLESPACE_CLAUSE = re.compile(r"TABLESPACE\s+\w+", re.IGNORECASE)


@dataclass(frozen=True)
class Artifact:
    """Rendered content and every path it is written to."""

    kind: ArtifactKind
    paths: Tuple[Path, ...]
    content: str


@dataclass(frozen=True)
class CompileResult:
    source: str
    declarations: Tuple[DeclarationNode, ...]
    model: TypeModel


def read_source_file(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise InputReadError(f"Unable to read file at path: {path}", path=str(path)) from exc


def concat_sources(sql: Sequence[str] = (), sql_files: Sequence[str | Path] = ()) -> str:
    """Join inline SQL and file contents into the text handed to the parser."""
    parts = list(sql)
    for path in sql_files:
        logger.info(f"Load {path}")
        parts.append(read_source_file(path))
    return _TABLESPACE_CLAUSE.sub("", SOURCE_SEPARATOR.join(parts))


def compile_schema(
    source: str,
    config: GeneratorConfig,
    *,
    parser: Optional[DeclarationParser] = None,
) -> CompileResult:
    """Load type maps, parse `source` and build its type model."""
    resolver = load_type_map_resolver(config.type_map_files, clear_defaults=config.clear_type_map)
    parser = parser or SqlglotDeclarationParser(config.dialect)
    declarations = tuple(parser.parse(source))
    ctx = BuildContext(source=source, resolver=resolver, insert_suffix=config.insert_suffix)
    model = build_type_model(declarations, ctx)
    return CompileResult(source=source, declarations=declarations, model=model)


def render_artifacts(result: CompileResult, targets: OutputTargets) -> List[Artifact]:
    """Render every requested artifact except the barrel."""
    model = result.model
    renderers: Dict[ArtifactKind, Callable[[], str]] = {
        ArtifactKind.TYPESCRIPT: lambda: render_typescript(model.records),
        ArtifactKind.ZOD: lambda: render_zod(model.records),
        ArtifactKind.CONVO: lambda: render_convo(model.records),
        ArtifactKind.TYPE_MAP: lambda: render_type_map(model),
        ArtifactKind.TABLE_MAP: lambda: render_table_map(model),
        ArtifactKind.TS_TABLE_MAP: lambda: render_ts_table_map(model),
        ArtifactKind.TYPE_LIST: lambda: render_type_list(model),
        ArtifactKind.TYPE_LIST_SHORT: lambda: render_type_list(model, short=True),
        ArtifactKind.TYPE_INDEX: lambda: render_type_index(model),
        ArtifactKind.PARSED_SQL: lambda: render_declarations(result.declarations),
    }
    return [
        Artifact(kind=kind, paths=tuple(targets.get(kind)), content=render())
        for kind, render in renderers.items()
        if targets.requested(kind)
    ]


def barrel_artifacts(targets: OutputTargets) -> List[Artifact]:
    """One barrel per barrel path, re-exporting the TypeScript modules."""
    artifacts: List[Artifact] = []
    for barrel_path in targets.get(ArtifactKind.BARREL):
        module_paths = []
        for kind in TS_MODULE_KINDS:
            paths = targets.get(kind)
            if not paths:
                continue
            # Prefer the copy that sits next to the barrel.
            sibling = next((p for p in paths if p.parent == barrel_path.parent), paths[0])
            module_paths.append(sibling)
        artifacts.append(
            Artifact(
                kind=ArtifactKind.BARREL,
                paths=(barrel_path,),
                content=render_barrel(barrel_path, module_paths),
            )
        )
    return artifacts


def write_artifact(artifact: Artifact) -> None:
    logger.info(f"Write {', '.join(str(p) for p in artifact.paths)}")
    for path in artifact.paths:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(artifact.content, encoding="utf-8")
        except OSError as exc:
            raise OutputWriteError(f"Unable to write file at path: {path}", path=str(path)) from exc


async def write_artifacts(artifacts: Sequence[Artifact], targets: OutputTargets) -> None:
    """Write independent artifacts concurrently, then the barrel."""
    await asyncio.gather(*(asyncio.to_thread(write_artifact, artifact) for artifact in artifacts))
    for barrel in barrel_artifacts(targets):
        await asyncio.to_thread(write_artifact, barrel)


def generate(
    config: GeneratorConfig,
    targets: OutputTargets,
    *,
    sql: Sequence[str] = (),
    sql_files: Sequence[str | Path] = (),
    parser: Optional[DeclarationParser] = None,
) -> CompileResult:
    """Run the whole pipeline and write every requested artifact."""
    source = concat_sources(sql, sql_files)
    result = compile_schema(source, config, parser=parser)
    artifacts = render_artifacts(result, targets)
    asyncio.run(write_artifacts(artifacts, targets))
    return result

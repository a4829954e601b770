from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from node_to_md.config import INSTRUCTIONS_FILE, OUTPUT_DIR, EmittedBlock, ExtensionClassifier, RunSummary
from node_to_md.content_transformation import transform
from node_to_md.exceptions import ConfigurationError, FilesystemAccessError
from node_to_md.file_manipulation import apply_filters, read_text, walk_files
from node_to_md.logging import logger
from node_to_md.output_construction import (
    build_instructions,
    build_markdown,
    make_block,
    order_candidates,
    read_synopsis,
)

if TYPE_CHECKING:
    from node_to_md.config import FilterConfig


class ExportResult(BaseModel):
    """What a run produced."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    markdown_path: Path = Field(..., description="Written document")
    instructions_path: Path = Field(..., description="Written instructions")
    blocks: tuple[EmittedBlock, ...] = Field(default=(), description="Emitted blocks, in order")
    summary: RunSummary = Field(default_factory=RunSummary, description="Per-extension counts")


def collect_blocks(
    repo: Path,
    config: FilterConfig,
    classifier: ExtensionClassifier,
) -> list[EmittedBlock]:
    """Walk, filter, order, read and transform the project's files.

    Args:
        repo (Path): the project root
        config (FilterConfig): the run's exclusion flags
        classifier (ExtensionClassifier): the extension table

    Returns:
        list[EmittedBlock]: non-empty blocks in document order
    """
    candidates = apply_filters(walk_files(repo, classifier), repo, config)
    blocks: list[EmittedBlock] = []
    for candidate in order_candidates(candidates):
        content = transform(read_text(candidate.path), candidate.extension, config)
        block = make_block(candidate, content)
        if block is None:
            logger.info("file_skipped_empty", path=candidate.rel)
            continue
        blocks.append(block)
    return blocks


def _write(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FilesystemAccessError(path=path, reason=str(e)) from e


def export_project(
    repo: Path,
    config: FilterConfig,
    classifier: ExtensionClassifier | None = None,
) -> ExportResult:
    """Export the project under `repo` to `<repo>/src/<repo name>.md` plus instructions.

    Args:
        repo (Path): the project root
        config (FilterConfig): the run's exclusion flags
        classifier (ExtensionClassifier | None): the extension table; defaults to the built-in one

    Raises:
        ConfigurationError: if `repo` is not a directory
        FilesystemAccessError: if any read or write fails

    Returns:
        ExportResult: written paths, blocks and summary
    """
    if not repo.is_dir():
        msg = f"Project root is not a directory: {repo}"
        raise ConfigurationError(message=msg)
    classifier = classifier or ExtensionClassifier()

    blocks = collect_blocks(repo, config, classifier)

    out_dir = repo / OUTPUT_DIR
    try:
        out_dir.mkdir(exist_ok=True)
    except OSError as e:
        raise FilesystemAccessError(path=out_dir, reason=str(e)) from e

    document_name = f"{repo.name}.md"
    markdown_path = out_dir / document_name
    instructions_path = out_dir / INSTRUCTIONS_FILE

    _write(markdown_path, build_markdown(blocks))
    instructions = build_instructions(
        read_synopsis(repo),
        project=repo.name,
        document_name=document_name,
        exclusion_clause=config.exclusion_clause,
    )
    _write(instructions_path, instructions)
    logger.info(
        "export_written",
        markdown=str(markdown_path),
        instructions=str(instructions_path),
        files=len(blocks),
    )

    return ExportResult(
        markdown_path=markdown_path,
        instructions_path=instructions_path,
        blocks=tuple(blocks),
        summary=RunSummary.from_blocks(blocks),
    )

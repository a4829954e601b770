from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import pathspec

from node_to_md.config import (
    IGNORE_FILE,
    SKIP_DIRS,
    TYPE_DEFINITION_BASENAMES,
    CandidateFile,
    Category,
    ExtensionClassifier,
    FilterConfig,
    compile_globs,
)
from node_to_md.exceptions import FilesystemAccessError
from node_to_md.logging import logger

if TYPE_CHECKING:
    from collections.abc import Sequence


def relpath(path: Path, root: Path) -> str:
    """Send the relative path of path from root.

    Args:
        path (Path): the path to "relativise"
        root (Path): the root to relativise from

    Returns:
        str: the relative path from root to path, with POSIX separators.
            If path is not under root, returns the original path as a string.
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def _raise_walk_error(err: OSError) -> NoReturn:
    raise FilesystemAccessError(path=Path(err.filename or ""), reason=err.strerror or str(err)) from err


def walk_files(repo: Path, classifier: ExtensionClassifier) -> list[CandidateFile]:
    """Collect candidate files by walking the filesystem under `repo`.

    Directories named in `SKIP_DIRS` are pruned wherever they appear and
    symlinked files are skipped. A file becomes a candidate when its last
    extension segment is accepted by the classifier; its rule is then
    resolved from the full name so that "foo.d.ts" is classified as a type
    definition.

    Args:
        repo (Path): the root directory to walk
        classifier (ExtensionClassifier): the extension table

    Raises:
        FilesystemAccessError: if any directory cannot be listed

    Returns:
        list[CandidateFile]: candidates in walk order
    """
    accepted = classifier.accepted_extensions
    results: list[CandidateFile] = []
    for root, dirs, files in os.walk(repo, onerror=_raise_walk_error):
        dirs[:] = [d for d in dirs if d not in SKIP_DIRS]
        for f in files:
            p = Path(root) / f
            if p.suffix not in accepted or p.is_symlink() or not p.is_file():
                continue
            results.append(
                CandidateFile(
                    path=p,
                    rel=relpath(p, repo),
                    extension=p.suffix,
                    rule=classifier.classify_name(p.name),
                ),
            )
    logger.info("candidates_collected", repo=str(repo), count=len(results))
    return results


def load_ignore_spec(repo: Path) -> pathspec.GitIgnoreSpec | None:
    """Load the `.gitignore` at the project root, if any.

    Args:
        repo (Path): the project root

    Raises:
        FilesystemAccessError: if the ignore file exists but cannot be read

    Returns:
        pathspec.GitIgnoreSpec | None: the compiled ignore rules, or None without an ignore file
    """
    ignore_file = repo / IGNORE_FILE
    if not ignore_file.is_file():
        return None
    try:
        lines = ignore_file.read_text(encoding="utf-8", errors="ignore").splitlines()
    except OSError as e:
        raise FilesystemAccessError(path=ignore_file, reason=str(e)) from e
    return pathspec.GitIgnoreSpec.from_lines(lines)


def is_type_definition(candidate: CandidateFile) -> bool:
    """Check whether a candidate declares types rather than runtime code.

    Args:
        candidate (CandidateFile): the candidate to check

    Returns:
        bool: True for TypeDefinition rules, well-known declaration basenames and any "*.d.ts"
    """
    name = candidate.path.name
    return (
        candidate.category is Category.TYPE_DEFINITION
        or name in TYPE_DEFINITION_BASENAMES
        or name.endswith(".d.ts")
    )


def apply_filters(
    candidates: Sequence[CandidateFile],
    repo: Path,
    config: FilterConfig,
) -> list[CandidateFile]:
    """Drop candidates matched by any active exclusion rule.

    Rules are independent: style files when styles are excluded, type
    definitions when types are excluded, user exclude globs, and `.gitignore`
    matches unless ignored files are included. The result is always a subset
    of `candidates`, in the same order.

    Args:
        candidates (Sequence[CandidateFile]): walker output
        repo (Path): the project root, for the ignore file
        config (FilterConfig): the run's exclusion flags

    Returns:
        list[CandidateFile]: the surviving candidates
    """
    exclude_spec = compile_globs(config.exclude_globs) if config.exclude_globs else None
    ignore_spec = None if config.include_ignored else load_ignore_spec(repo)

    dropped: dict[str, int] = {"styles": 0, "types": 0, "globs": 0, "ignored": 0}
    out: list[CandidateFile] = []
    for c in candidates:
        if config.exclude_styles and c.category is Category.STYLE:
            dropped["styles"] += 1
            continue
        if config.exclude_types and is_type_definition(c):
            dropped["types"] += 1
            continue
        if exclude_spec is not None and exclude_spec.match_file(c.rel):
            dropped["globs"] += 1
            continue
        if ignore_spec is not None and ignore_spec.match_file(c.rel):
            dropped["ignored"] += 1
            continue
        out.append(c)
    logger.info("candidates_filtered", kept=len(out), **dropped)
    return out


def read_text(path: Path) -> str:
    """Read a candidate file as UTF-8, dropping undecodable bytes.

    Args:
        path (Path): the file to read

    Raises:
        FilesystemAccessError: if the file cannot be read

    Returns:
        str: the file content
    """
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        raise FilesystemAccessError(path=path, reason=str(e)) from e

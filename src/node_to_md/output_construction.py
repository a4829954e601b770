from __future__ import annotations

from typing import TYPE_CHECKING

from node_to_md.config import README_FILE, EmittedBlock
from node_to_md.exceptions import FilesystemAccessError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from node_to_md.config import CandidateFile

FRAMEWORKS = "/".join(["TypeScript", "JavaScript", "React", "Vue", "Svelte", "Solid", "Astro"])

SYNOPSIS_PLACEHOLDER = "[Please provide a synopsis of the {project} project.]"

ANALYSIS_PARAGRAPH = (
    "Please act as an expert {frameworks} developer and software engineer. "
    "The attached {document} file contains the complete and up-to-date codebase "
    "for our application{clause}. Your task is to thoroughly analyze the codebase, "
    "understand its programming flow and logic, and provide detailed insights, "
    "suggestions, and solutions to enhance the application's performance, "
    "efficiency, readability, and maintainability."
)

CLOSING_PARAGRAPH = (
    "We highly value responses that demonstrate a deep understanding of the code. "
    "Please ensure your recommendations are thoughtful, well-analyzed, and contribute "
    "positively to the project's success. Your expertise is crucial in helping us "
    "improve and upgrade our application."
)


def order_candidates(candidates: Iterable[CandidateFile]) -> list[CandidateFile]:
    """Order candidates by extension, then by path.

    Groups same-type files together and gives a total order, so identical
    trees always produce identical documents.

    Args:
        candidates (Iterable[CandidateFile]): the files to order

    Returns:
        list[CandidateFile]: the ordered files
    """
    return sorted(candidates, key=lambda c: (c.extension, c.rel))


def make_block(candidate: CandidateFile, content: str) -> EmittedBlock | None:
    """Wrap transformed content into a block, or None when nothing is left to show.

    Args:
        candidate (CandidateFile): the source file
        content (str): its transformed content

    Returns:
        EmittedBlock | None: the block, or None for empty or whitespace-only content
    """
    if not content.strip():
        return None
    return EmittedBlock(rel=candidate.rel, language=candidate.language, content=content)


def render_block(block: EmittedBlock) -> str:
    """Render one file section: heading, then the fenced content.

    Args:
        block (EmittedBlock): the block to render

    Returns:
        str: the markdown section, without trailing blank line
    """
    body = block.content.rstrip("\n")
    return f"# {block.rel} ({block.language})\n\n```{block.language}\n{body}\n```"


def build_markdown(blocks: Sequence[EmittedBlock]) -> str:
    """Concatenate rendered blocks, separated by a blank line.

    Args:
        blocks (Sequence[EmittedBlock]): blocks in emission order

    Returns:
        str: the document, ending with a single newline (empty without blocks)
    """
    if not blocks:
        return ""
    return "\n\n".join(render_block(b) for b in blocks) + "\n"


def extract_synopsis(text: str) -> str:
    """Pick the first prose line of a project description.

    Args:
        text (str): the description file content

    Returns:
        str: the first non-empty line that is neither a heading nor a fence, trimmed; "" if none
    """
    for line in text.splitlines():
        s = line.strip()
        if not s or s.startswith(("#", "```")):
            continue
        return s
    return ""


def read_synopsis(repo: Path) -> str:
    """Read the synopsis from the README at the project root.

    Args:
        repo (Path): the project root

    Raises:
        FilesystemAccessError: if the README exists but cannot be read

    Returns:
        str: the synopsis, or "" when there is no README or no prose line
    """
    readme = repo / README_FILE
    if not readme.is_file():
        return ""
    try:
        text = readme.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        raise FilesystemAccessError(path=readme, reason=str(e)) from e
    return extract_synopsis(text)


def build_instructions(
    synopsis: str,
    *,
    project: str,
    document_name: str,
    exclusion_clause: str = "",
) -> str:
    """Render the instructions that accompany the exported document.

    Args:
        synopsis (str): the project synopsis; a placeholder naming `project` is used when empty
        project (str): the project name
        document_name (str): file name of the exported document
        exclusion_clause (str): e.g. "(excluding styles)"; omitted when empty

    Returns:
        str: the instructions text
    """
    clause = f" {exclusion_clause}" if exclusion_clause else ""
    return "\n".join([
        synopsis or SYNOPSIS_PLACEHOLDER.format(project=project),
        "",
        ANALYSIS_PARAGRAPH.format(frameworks=FRAMEWORKS, document=document_name, clause=clause),
        "",
        CLOSING_PARAGRAPH,
    ])

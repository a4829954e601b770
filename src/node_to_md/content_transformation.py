"""Text rewrites applied to a file before it is emitted.

These are regex heuristics, not parsers. Nested braces inside interface,
enum or namespace bodies end the match at the first closing brace, and the
annotation rule also rewrites object-literal entries shaped like `key: value`.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from node_to_md.config import COMPONENT_EXTENSIONS, TYPE_STRIP_EXTENSIONS

if TYPE_CHECKING:
    from node_to_md.config import FilterConfig

STYLE_BLOCK_RE = re.compile(r"<style(?:\s[^>]*)?>.*?</style\s*>", re.IGNORECASE | re.DOTALL)

_PREFIX = r"^[ \t]*(?:export[ \t]+)?(?:declare[ \t]+)?"
# The opening brace may sit on a later line than the declaration header.
_BLOCK_TAIL = r"\s*\{[^}]*\}[ \t]*;?[ \t]*\n?"

INTERFACE_RE = re.compile(_PREFIX + r"interface[ \t]+\w+[^{;]*\{[^}]*\}[ \t]*;?[ \t]*\n?", re.MULTILINE)
TYPE_ALIAS_RE = re.compile(
    _PREFIX + r"type[ \t]+\w+[^=\n]*=(?:[ \t]*\{[^}]*\}[^\n]*|[^\n]*)\n?",
    re.MULTILINE,
)
DECLARE_RE = re.compile(r"^[ \t]*(?:export[ \t]+)?declare[ \t][^\n]*;[ \t]*\n?", re.MULTILINE)
ENUM_RE = re.compile(_PREFIX + r"(?:const[ \t]+)?enum[ \t]+\w+" + _BLOCK_TAIL, re.MULTILINE)
NAMESPACE_RE = re.compile(_PREFIX + r"namespace[ \t]+[\w.]+" + _BLOCK_TAIL, re.MULTILINE)
# `name: Type` / `name?: Type` / `): Type` up to a comma, closing paren, brace, `;`, `=` or end of line.
ANNOTATION_RE = re.compile(
    r"(?<=[\w$)\]])\??:[ \t]*[A-Za-z_$][\w$.<>\[\]|& \t]*?(?=[ \t]*(?:[,){};=]|$))",
    re.MULTILINE,
)
BLANK_RUN_RE = re.compile(r"\n(?:[ \t]*\n){3,}")

_DECLARATION_RULES: tuple[re.Pattern[str], ...] = (
    INTERFACE_RE,
    TYPE_ALIAS_RE,
    DECLARE_RE,
    ENUM_RE,
    NAMESPACE_RE,
)


def strip_styles(content: str, extension: str) -> str:
    """Remove every `<style>` block from a component-framework file.

    Args:
        content (str): raw file text
        extension (str): the file's extension

    Returns:
        str: the text without style blocks; unchanged for non-component files
    """
    if extension not in COMPONENT_EXTENSIONS:
        return content
    return STYLE_BLOCK_RE.sub("", content)


def strip_types(content: str) -> str:
    """Best-effort removal of TypeScript-only syntax.

    Declarations (interfaces, type aliases, `declare` statements, enums,
    namespaces) are removed first, then inline annotations, then runs of
    three or more blank lines are collapsed to one.

    Args:
        content (str): TypeScript source text

    Returns:
        str: the rewritten text
    """
    out = content
    for rule in _DECLARATION_RULES:
        out = rule.sub("", out)
    out = ANNOTATION_RE.sub("", out)
    return BLANK_RUN_RE.sub("\n\n", out)


def transform(content: str, extension: str, config: FilterConfig) -> str:
    """Apply the rewrites enabled by `config` to one file's content.

    Args:
        content (str): raw file text
        extension (str): the file's last extension segment
        config (FilterConfig): the run's exclusion flags

    Returns:
        str: the text to emit; may be empty, in which case the file is skipped
    """
    if config.exclude_styles:
        content = strip_styles(content, extension)
    if config.exclude_types and extension in TYPE_STRIP_EXTENSIONS:
        content = strip_types(content)
    return content

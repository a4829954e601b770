from __future__ import annotations

from collections import Counter
from enum import StrEnum, auto
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

import pathspec
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, computed_field, field_validator

from node_to_md.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from node_to_md.settings import Settings


class Category(StrEnum):
    """Exclusion category an extension belongs to."""

    NONE = auto()
    STYLE = auto()
    TYPE_DEFINITION = auto()


class ExtensionRule(BaseModel):
    """Language tag and category for one file extension.

    Attributes:
        extension: Extension including the leading dot; may be compound (".d.ts").
        language: Code fence language tag.
        category: Exclusion category.
    """

    model_config = ConfigDict(frozen=True)

    extension: str = Field(..., description="Extension with leading dot")
    language: str = Field(..., description="Code fence language tag")
    category: Category = Field(default=Category.NONE, description="Exclusion category")


FALLBACK_RULE = ExtensionRule(extension="", language="plaintext")

DEFAULT_RULES: tuple[ExtensionRule, ...] = (
    # TypeScript
    ExtensionRule(extension=".ts", language="typescript"),
    ExtensionRule(extension=".tsx", language="typescript"),
    ExtensionRule(extension=".mts", language="typescript"),
    ExtensionRule(extension=".cts", language="typescript"),
    ExtensionRule(extension=".d.ts", language="typescript", category=Category.TYPE_DEFINITION),
    # JavaScript
    ExtensionRule(extension=".js", language="javascript"),
    ExtensionRule(extension=".jsx", language="javascript"),
    ExtensionRule(extension=".mjs", language="javascript"),
    ExtensionRule(extension=".cjs", language="javascript"),
    ExtensionRule(extension=".styled", language="javascript"),
    # Component frameworks
    ExtensionRule(extension=".svelte", language="svelte"),
    ExtensionRule(extension=".vue", language="vue"),
    ExtensionRule(extension=".astro", language="astro"),
    # Styles
    ExtensionRule(extension=".css", language="css", category=Category.STYLE),
    ExtensionRule(extension=".scss", language="scss", category=Category.STYLE),
    ExtensionRule(extension=".sass", language="sass", category=Category.STYLE),
    ExtensionRule(extension=".less", language="less", category=Category.STYLE),
    ExtensionRule(extension=".styl", language="stylus", category=Category.STYLE),
    ExtensionRule(extension=".postcss", language="css", category=Category.STYLE),
)

# Directory names never descended into.
SKIP_DIRS: frozenset[str] = frozenset({".git", "node_modules", "dist", "build", "out"})

TYPE_DEFINITION_BASENAMES: frozenset[str] = frozenset(
    {"types.ts", "global.d.ts", "globals.d.ts", "app.d.ts", "env.d.ts", "vite-env.d.ts"},
)

COMPONENT_EXTENSIONS: frozenset[str] = frozenset({".vue", ".svelte", ".astro"})
TYPE_STRIP_EXTENSIONS: frozenset[str] = frozenset({".ts", ".tsx"})

IGNORE_FILE = ".gitignore"
README_FILE = "README.md"
INSTRUCTIONS_FILE = "custom_instructions.txt"
OUTPUT_DIR = "src"


class ExtensionClassifier(BaseModel):
    """Immutable lookup table from extension to `ExtensionRule`.

    Built once per run and handed to the walker and the filter. Compound
    extensions such as ".d.ts" are only found by `classify_name`, which
    matches the longest known suffix of the full file name.
    """

    model_config = ConfigDict(frozen=True)

    rules: tuple[ExtensionRule, ...] = Field(default=DEFAULT_RULES)

    _by_extension: dict[str, ExtensionRule] = PrivateAttr(default_factory=dict)

    @field_validator("rules")
    @classmethod
    def _unique_extensions(cls, rules: tuple[ExtensionRule, ...]) -> tuple[ExtensionRule, ...]:
        dupes = [ext for ext, n in Counter(r.extension for r in rules).items() if n > 1]
        if dupes:
            msg = f"Duplicate extension rules: {', '.join(sorted(dupes))}"
            raise ValueError(msg)
        return rules

    def model_post_init(self, context: object, /) -> None:
        self._by_extension.update({r.extension: r for r in self.rules})

    @property
    def accepted_extensions(self) -> frozenset[str]:
        """Single-segment extensions a walked file may carry to become a candidate."""
        return frozenset(ext for ext in self._by_extension if ext.count(".") == 1)

    def classify(self, extension: str) -> ExtensionRule:
        """Return the rule for `extension`, or the plaintext fallback.

        Args:
            extension (str): the extension, leading dot included, case-sensitive

        Returns:
            ExtensionRule: the matching rule or `FALLBACK_RULE`
        """
        return self._by_extension.get(extension, FALLBACK_RULE)

    def classify_name(self, name: str) -> ExtensionRule:
        """Classify a file name, preferring the longest matching compound suffix.

        Args:
            name (str): a file base name such as "foo.d.ts"

        Returns:
            ExtensionRule: the most specific matching rule, or `FALLBACK_RULE`
        """
        best = FALLBACK_RULE
        for ext, rule in self._by_extension.items():
            if name.endswith(ext) and len(name) > len(ext) and len(ext) > len(best.extension):
                best = rule
        return best


class CandidateFile(BaseModel):
    """A walked file whose extension is recognised.

    Attributes:
        path: Absolute path to the file on disk.
        rel: Path relative to the project root, POSIX separators.
        extension: Last extension segment as found on disk (".ts" for "foo.d.ts").
        rule: Classification of the full file name.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    path: Path = Field(..., description="Absolute file path")
    rel: str = Field(..., description="File path relative to project root")
    extension: str = Field(..., description="Last extension segment")
    rule: ExtensionRule = Field(..., description="Extension rule")

    @computed_field
    @property
    def language(self) -> str:
        """Code fence language for the file."""
        return self.rule.language

    @computed_field
    @property
    def category(self) -> Category:
        """Exclusion category for the file."""
        return self.rule.category


def normalize_globs(globs: Iterable[str]) -> list[str]:
    """Normalize a sequence of path glob patterns.

    Normalize a sequence of glob patterns by stripping whitespace and
    replacing backslashes with forward slashes.

    Args:
        globs (Iterable[str]): the glob patterns to normalize

    Returns:
        list[str]: the normalized glob patterns
    """
    out: list[str] = []
    for g in globs:
        g2 = (g or "").strip()
        if not g2:
            continue
        out.append(g2.replace("\\", "/"))
    return out


def compile_globs(globs: Sequence[str]) -> pathspec.GitIgnoreSpec:
    """Compile exclude globs (`*` within a segment, `**` across segments).

    Args:
        globs (Sequence[str]): normalized glob patterns

    Raises:
        ConfigurationError: if a pattern is a negation or cannot be compiled

    Returns:
        pathspec.GitIgnoreSpec: the compiled matcher
    """
    for g in globs:
        if g.startswith("!"):
            msg = f"Negated pattern not allowed in exclude list: {g!r}"
            raise ConfigurationError(message=msg)
    try:
        return pathspec.GitIgnoreSpec.from_lines(globs)
    except ValueError as e:
        msg = f"Malformed glob pattern: {e}"
        raise ConfigurationError(message=msg) from e


class FilterConfig(BaseModel):
    """Exclusion flags for one run."""

    model_config = ConfigDict(frozen=True)

    exclude_styles: bool = False
    exclude_types: bool = False
    exclude_globs: tuple[str, ...] = ()
    include_ignored: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> FilterConfig:
        """Build the filter configuration from parsed CLI settings.

        The comma-separated exclude list is split and compiled here so that a
        malformed pattern fails before any traversal.

        Args:
            settings (Settings): the parsed options

        Returns:
            FilterConfig: the run's filter configuration
        """
        globs = tuple(normalize_globs(settings.exclude.split(",")))
        compile_globs(globs)
        return cls(
            exclude_styles=settings.no_styles,
            exclude_types=settings.no_types,
            exclude_globs=globs,
            include_ignored=settings.include_ignored,
        )

    @property
    def exclusion_clause(self) -> str:
        """Human-readable note of excluded categories, empty when nothing is excluded."""
        parts = []
        if self.exclude_styles:
            parts.append("styles")
        if self.exclude_types:
            parts.append("type definitions")
        if not parts:
            return ""
        return f"(excluding {' and '.join(parts)})"


class EmittedBlock(BaseModel):
    """One file's section in the assembled document."""

    model_config = ConfigDict(frozen=True)

    rel: str
    language: str
    content: str

    @property
    def extension(self) -> str:
        """Last extension segment of the file."""
        return PurePosixPath(self.rel).suffix


class RunSummary(BaseModel):
    """Per-extension counts of emitted files."""

    model_config = ConfigDict(frozen=True)

    counts: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_blocks(cls, blocks: Iterable[EmittedBlock]) -> RunSummary:
        """Count emitted blocks per extension.

        Returns:
            RunSummary: the summary
        """
        return cls(counts=dict(Counter(b.extension for b in blocks)))

    @property
    def total(self) -> int:
        """Number of emitted files."""
        return sum(self.counts.values())

    def ordered(self) -> list[tuple[str, int]]:
        """Counts sorted by frequency, then extension.

        Returns:
            list[tuple[str, int]]: (extension, count) pairs
        """
        return sorted(self.counts.items(), key=lambda kv: (-kv[1], kv[0]))

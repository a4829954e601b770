from __future__ import annotations

import re

import pytest

from node_to_md.config import FilterConfig
from node_to_md.content_transformation import strip_styles, strip_types, transform

DECLARATION_LINE = re.compile(r"^(interface \w+|type \w+ =|enum \w+|namespace \w+)", re.MULTILINE)


@pytest.mark.unit
def test_strip_styles_removes_vue_style_block() -> None:
    source = "<template><p>hi</p></template><style scoped lang=\"scss\">.a{color:red}</style>"

    assert strip_styles(source, ".vue") == "<template><p>hi</p></template>"


@pytest.mark.unit
def test_strip_styles_removes_every_block_case_insensitively() -> None:
    source = (
        "<script>\nlet a = 1;\n</script>\n"
        "<STYLE>\n.a { color: red; }\n</STYLE>\n"
        "<main>{a}</main>\n"
        "<style global>\n.b { color: blue; }\n</style>\n"
    )

    out = strip_styles(source, ".svelte")

    assert "<main>{a}</main>" in out
    assert "let a = 1;" in out
    assert re.search(r"<style", out, re.IGNORECASE) is None
    assert "color" not in out


@pytest.mark.unit
def test_strip_styles_leaves_other_languages_alone() -> None:
    source = "const html = '<style>a{}</style>';\n"

    assert strip_styles(source, ".ts") == source


@pytest.mark.unit
def test_strip_types_removes_inline_annotation() -> None:
    assert strip_types("const x: number = 1;") == "const x = 1;"


@pytest.mark.unit
def test_strip_types_removes_signature_annotations() -> None:
    source = "function add(a: number, b?: number): number {\n  return a + b;\n}\n"

    assert strip_types(source) == "function add(a, b) {\n  return a + b;\n}\n"


@pytest.mark.unit
def test_strip_types_removes_interface() -> None:
    source = "export interface Props extends Base {\n  label: string;\n}\nconst b = 1;\n"

    assert strip_types(source) == "const b = 1;\n"


@pytest.mark.unit
def test_strip_types_removes_type_alias_and_annotation() -> None:
    source = "export type Id = string | number;\nlet id: Id;\n"

    assert strip_types(source) == "let id;\n"


@pytest.mark.unit
def test_strip_types_removes_declare_statement() -> None:
    source = "declare const VERSION: string;\nboot();\n"

    assert strip_types(source) == "boot();\n"


@pytest.mark.unit
def test_strip_types_removes_enum_and_namespace() -> None:
    source = (
        "const enum Color {\n  Red,\n  Green,\n}\n"
        "namespace Util {\n  export const a = 1;\n}\n"
        "run();\n"
    )

    assert strip_types(source) == "run();\n"


@pytest.mark.unit
def test_strip_types_keeps_ternaries() -> None:
    source = "const y = ok ? left : right;\n"

    assert strip_types(source) == source


@pytest.mark.unit
def test_strip_types_rewrites_object_literal_entries() -> None:
    # Known limitation of the annotation heuristic.
    assert strip_types("const o = { a: b };") == "const o = { a };"


@pytest.mark.unit
def test_strip_types_collapses_long_blank_runs() -> None:
    assert strip_types("a\n\n\n\n\nb") == "a\n\nb"
    assert strip_types("a\n\n\nb") == "a\n\n\nb"


@pytest.mark.unit
def test_strip_types_leaves_no_declaration_lines() -> None:
    source = (
        "interface A {\n  b: { c: string };\n  d: number;\n}\n"
        "type B = A;\n"
        "enum E { X, Y }\n"
        "namespace N {\n  interface Inner { x: string }\n}\n"
        "export function f(a: A): B {\n  return a;\n}\n"
    )

    out = strip_types(source)

    assert DECLARATION_LINE.search(out) is None
    assert "export function f(a) {" in out


@pytest.mark.unit
@pytest.mark.parametrize(
    "source",
    [
        "interface Props\n  extends Base {\n  a: string;\n}\nrun();\n",
        "enum Color\n{\n  Red,\n}\nrun();\n",
        "namespace Util\n{\n  export const a = 1;\n}\nrun();\n",
    ],
)
def test_strip_types_removes_declarations_with_wrapped_header(source: str) -> None:
    out = strip_types(source)

    assert out == "run();\n"
    assert DECLARATION_LINE.search(out) is None


@pytest.mark.unit
def test_strip_types_removes_alias_with_nested_generics() -> None:
    source = "type Fn<T extends Array<number>> = T[];\nrun();\n"

    assert strip_types(source) == "run();\n"


@pytest.mark.unit
def test_transform_applies_type_stripping_only_to_ts_and_tsx() -> None:
    config = FilterConfig(exclude_types=True)
    source = "let a: string;\n"

    assert transform(source, ".ts", config) == "let a;\n"
    assert transform(source, ".tsx", config) == "let a;\n"
    assert transform(source, ".mts", config) == source
    assert transform(source, ".js", config) == source


@pytest.mark.unit
def test_transform_without_flags_is_identity() -> None:
    source = "<template/>\n<style>a{}</style>\nlet a: string;\n"

    assert transform(source, ".vue", FilterConfig()) == source
    assert transform(source, ".ts", FilterConfig()) == source


@pytest.mark.unit
def test_transform_can_empty_a_file() -> None:
    config = FilterConfig(exclude_types=True)

    assert not transform("export interface A {\n  a: string;\n}\n", ".ts", config).strip()

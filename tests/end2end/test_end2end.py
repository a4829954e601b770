import re

from node_to_md import cli


def test_end_to_end_strips_types_and_uses_placeholder(write_tree) -> None:
    root = write_tree({"src/App.tsx": "const x: number = 1;"})

    exit_code = cli.main(["--repo", str(root), "--no-types"])

    assert exit_code == 0
    document = (root / "src" / "myapp.md").read_text(encoding="utf-8")
    assert "# src/App.tsx (typescript)" in document
    assert "```typescript\nconst x = 1;\n```" in document
    instructions = (root / "src" / "custom_instructions.txt").read_text(encoding="utf-8")
    assert "[Please provide a synopsis of the myapp project.]" in instructions
    assert "(excluding type definitions)" in instructions


def test_end_to_end_no_styles_strips_component_styles(write_tree) -> None:
    root = write_tree({
        "Comp.vue": "<template><div class=\"a\">x</div></template><style>.a{color:red}</style>",
        "main.css": ".a { color: red; }\n",
    })

    exit_code = cli.main(["--repo", str(root), "--no-styles"])

    assert exit_code == 0
    document = (root / "src" / "myapp.md").read_text(encoding="utf-8")
    assert "# Comp.vue (vue)" in document
    assert re.search(r"<style", document, re.IGNORECASE) is None
    assert "main.css" not in document


def test_end_to_end_includes_styles_by_default(write_tree) -> None:
    root = write_tree({"a.css": "body { margin: 0; }\n"})

    exit_code = cli.main(["--repo", str(root)])

    assert exit_code == 0
    document = (root / "src" / "myapp.md").read_text(encoding="utf-8")
    assert "# a.css (css)\n\n```css\nbody { margin: 0; }\n```" in document


def test_end_to_end_is_deterministic_and_skips_node_modules(write_tree, capsys) -> None:
    root = write_tree({
        ".gitignore": "coverage/\n",
        "README.md": "# myapp\nShop front.\n",
        "src/b.ts": "export const b = 2;\n",
        "src/a.ts": "export const a = 1;\n",
        "src/view.jsx": "export default () => null;\n",
        "coverage/report.js": "x\n",
        "node_modules/react/index.js": "module.exports = {};\n",
        "packages/web/node_modules/vue/index.js": "module.exports = {};\n",
    })
    output = root / "src" / "myapp.md"

    assert cli.main(["--repo", str(root), "--exclude", "src/view.*"]) == 0
    first = output.read_bytes()
    assert cli.main(["--repo", str(root), "--exclude", "src/view.*"]) == 0

    assert output.read_bytes() == first
    document = first.decode("utf-8")
    assert "node_modules" not in document
    assert "coverage/report.js" not in document
    assert "view.jsx" not in document
    assert document.index("# src/a.ts") < document.index("# src/b.ts")
    out = capsys.readouterr().out
    assert ".ts: 2 files" in out
    instructions = (root / "src" / "custom_instructions.txt").read_text(encoding="utf-8")
    assert instructions.startswith("Shop front.\n")

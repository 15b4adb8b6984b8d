from __future__ import annotations

"""
Unit tests for the Folder Structure Parser.

Verifies:
1. Tree-drawn and plain-indentation reconstruction.
2. Kind classification, including the extensionless-file heuristic.
3. Comment and icon stripping.
4. Lenient handling of inconsistent indentation and empty input.
"""

from typing import List, Tuple

import pytest

from gitsense.core.analysis.structure_parser import (
    classify,
    clean_name,
    compute_depth,
    parse_structure,
)
from gitsense.domain.constants import SAMPLE_STRUCTURE
from gitsense.domain.structure_models import NodeKind, StructureNode


def shape(nodes: List[StructureNode]) -> List[Tuple]:
    """Reduce a forest to nested (name, kind, children) tuples for comparison."""
    return [(n.name, n.kind.value, shape(n.children)) for n in nodes]


# -----------------------------------------------------------------------------
# Reference Scenarios
# -----------------------------------------------------------------------------

def test_parse_tree_drawn_scenario(scenario_structure: str) -> None:
    """A root folder with a file and a nested component folder."""
    result = parse_structure(scenario_structure)

    assert shape(result.roots) == [
        ("app", "dir", [
            ("index.ts", "file", []),
            ("components", "dir", [
                ("Button.tsx", "file", []),
            ]),
        ]),
    ]
    assert result.file_count == 2
    assert result.dir_count == 2


def test_parse_single_file() -> None:
    result = parse_structure("notes.txt")

    assert shape(result.roots) == [("notes.txt", "file", [])]
    assert result.file_count == 1
    assert result.dir_count == 0


def test_duplicate_siblings_are_kept() -> None:
    """The parser enforces no uniqueness; both occurrences survive."""
    result = parse_structure("a.ts\na.ts")

    assert [n.name for n in result.roots] == ["a.ts", "a.ts"]
    assert result.file_count == 2


def test_sample_structure_counts_and_depth() -> None:
    result = parse_structure(SAMPLE_STRUCTURE)

    assert len(result.roots) == 1
    assert result.roots[0].name == "my-nextjs-app"
    assert result.file_count == 28
    assert result.dir_count == 15
    # my-nextjs-app / app / blog / [slug] / page.tsx
    assert result.max_nesting() == 4


# -----------------------------------------------------------------------------
# Kind Classification
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("token, expected_name, expected_kind", [
    ("src/", "src", NodeKind.DIRECTORY),
    ("README.md", "README.md", NodeKind.FILE),
    ("Dockerfile", "Dockerfile", NodeKind.DIRECTORY),
    ("Makefile", "Makefile", NodeKind.DIRECTORY),
    ("v1.2/", "v1.2", NodeKind.DIRECTORY),
    (".gitignore", ".gitignore", NodeKind.FILE),
    ("docs/guide.md", "docs/guide.md", NodeKind.FILE),
    ("assets//", "assets", NodeKind.DIRECTORY),
])
def test_classify(token: str, expected_name: str, expected_kind: NodeKind) -> None:
    assert classify(token) == (expected_name, expected_kind)


def test_extensionless_file_parses_as_directory() -> None:
    """Known heuristic defect: no dot means directory."""
    result = parse_structure("project/\n├── Dockerfile\n└── main.py")

    children = result.roots[0].children
    assert children[0].name == "Dockerfile"
    assert children[0].kind is NodeKind.DIRECTORY
    assert result.dir_count == 2
    assert result.file_count == 1


# -----------------------------------------------------------------------------
# Stripping
# -----------------------------------------------------------------------------

def test_icon_and_comment_are_stripped_once() -> None:
    result = parse_structure("├── 📁 src/  # source code")

    node = result.roots[0]
    assert node.name == "src"
    assert node.kind is NodeKind.DIRECTORY
    assert "#" not in node.name
    assert "📁" not in node.name


@pytest.mark.parametrize("line", [
    "⚙️ config.toml",
    "⚙ config.toml",
    "│   └── 📄 config.toml   # settings",
    "🚀✨ config.toml",
])
def test_clean_name_variants(line: str) -> None:
    name = clean_name(line)
    assert name == "config.toml"
    assert "\ufe0f" not in name


def test_comment_only_lines_produce_no_node() -> None:
    result = parse_structure("# project layout\nsrc/\n│   # nothing here\n")

    assert shape(result.roots) == [("src", "dir", [])]


# -----------------------------------------------------------------------------
# Indentation Handling
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("line, expected", [
    ("app/", 0),
    ("├── index.ts", 3),
    ("    └── Button.tsx", 5),
    ("│   ├── favicon.ico", 6),
    ("  src", 1),
    ("\tmain.py", 1),
])
def test_compute_depth(line: str, expected: int) -> None:
    assert compute_depth(line) == expected


def test_plain_indentation() -> None:
    text = (
        "project\n"
        "  src\n"
        "    main.py\n"
        "  README.md\n"
    )
    result = parse_structure(text)

    assert shape(result.roots) == [
        ("project", "dir", [
            ("src", "dir", [("main.py", "file", [])]),
            ("README.md", "file", []),
        ]),
    ]


def test_tab_indentation() -> None:
    result = parse_structure("src/\n\tmain.py\n\tlib/\n\t\tutil.py")

    assert shape(result.roots) == [
        ("src", "dir", [
            ("main.py", "file", []),
            ("lib", "dir", [("util.py", "file", [])]),
        ]),
    ]


def test_custom_indent_width() -> None:
    text = "src/\n    main.py\n    lib/\n        x.py\n"
    result = parse_structure(text, indent_width=4)

    assert [n.depth for n in result.roots[0].children] == [1, 1]
    assert result.roots[0].children[1].children[0].depth == 2
    assert result.max_nesting() == 2


def test_invalid_indent_width_raises() -> None:
    with pytest.raises(ValueError):
        parse_structure("src/", indent_width=0)


def test_over_indented_line_attaches_to_deepest_open_directory() -> None:
    text = (
        "src/\n"
        "          deep.ts\n"
        "  main.ts\n"
    )
    result = parse_structure(text)

    assert shape(result.roots) == [
        ("src", "dir", [("deep.ts", "file", []), ("main.ts", "file", [])]),
    ]


def test_lines_indented_under_a_file_attach_to_enclosing_level() -> None:
    """Files never open a frame, so deeper lines fall back to the open parent."""
    result = parse_structure("a.ts\n    b.ts")

    assert [n.name for n in result.roots] == ["a.ts", "b.ts"]


def test_sibling_order_matches_input_order() -> None:
    text = "root/\n├── c.ts\n├── a.ts\n├── b/\n└── d.ts"
    result = parse_structure(text)

    assert [n.name for n in result.roots[0].children] == ["c.ts", "a.ts", "b", "d.ts"]


def test_multiple_roots() -> None:
    result = parse_structure("src/\n  main.py\ntests/\n  test_main.py\nsetup.cfg")

    assert [n.name for n in result.roots] == ["src", "tests", "setup.cfg"]
    assert result.roots[1].children[0].name == "test_main.py"


def test_windows_line_endings() -> None:
    result = parse_structure("app/\r\n├── a.ts\r\n└── b.ts\r\n")

    assert shape(result.roots) == [("app", "dir", [("a.ts", "file", []), ("b.ts", "file", [])])]


# -----------------------------------------------------------------------------
# Empty Input
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("text", [None, "", "   \n\n", "│\n├──\n│   │", "# just a comment"])
def test_nothing_to_parse(text) -> None:
    result = parse_structure(text)

    assert result.is_empty
    assert result.roots == []
    assert result.file_count == 0
    assert result.dir_count == 0


def test_leading_and_trailing_blank_lines_are_ignored(scenario_structure: str) -> None:
    padded = "\n\n   \n" + scenario_structure + "\n\n"
    assert shape(parse_structure(padded).roots) == shape(parse_structure(scenario_structure).roots)

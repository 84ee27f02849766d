"""Tests for the ordered detection rules."""

from __future__ import annotations

import pytest

from componentlab.importers.rules import (
    FRAMEWORK_RULES,
    FileSet,
    detect_framework,
    detect_language,
    detect_main_file,
    snippet_extension,
    snippet_framework,
    snippet_language,
)
from componentlab.models import ImportFile


def _files(*names: str, content: str = "") -> list[ImportFile]:
    return [ImportFile(name=name, content=content) for name in names]


@pytest.mark.parametrize(
    ("names", "content", "expected"),
    [
        (["component.tsx"], "", "React"),
        (["app.js"], "import React from 'react';", "React"),
        (["app.js"], "import ReactDOM from 'react-dom';", "React"),
        (["hooks.js"], "import { useState } from 'react';", "React"),
        (["Modal.vue"], "", "Vue"),
        (["page.js"], "<template><div/></template>", "Vue"),
        (["card.component.ts"], "@Component({selector: 'x'})", "Angular"),
        (["Widget.svelte"], "", "Svelte"),
        (["main.dart"], "", "Flutter"),
        (["index.html", "app.js"], "", "HTML"),
        (["util.ts"], "", "JavaScript"),
        (["styles.css"], "", "HTML"),
        ([], "", "HTML"),
    ],
)
def test_detect_framework(names: list[str], content: str, expected: str) -> None:
    assert detect_framework(_files(*names, content=content)) == expected


def test_react_outranks_vue_marker() -> None:
    files = [ImportFile("a.jsx", ""), ImportFile("b.vue", "<template></template>")]
    assert detect_framework(files) == "React"


def test_rule_table_order_is_the_precedence() -> None:
    assert [rule.framework for rule in FRAMEWORK_RULES] == [
        "React",
        "Vue",
        "Angular",
        "Svelte",
        "Flutter",
        "HTML",
        "JavaScript",
    ]


def test_individual_rules_are_checkable() -> None:
    vue_rule = FRAMEWORK_RULES[1]
    assert vue_rule.matches(FileSet(extensions=frozenset({".vue"}), content=""))
    assert not vue_rule.matches(FileSet(extensions=frozenset({".js"}), content=""))


def test_detect_main_file_prefers_index_or_main() -> None:
    assert detect_main_file(_files("utils.js", "index.js", "readme.md")) == "index.js"
    assert detect_main_file(_files("a.js", "src/main.ts")) == "src/main.ts"
    assert detect_main_file(_files("Index.JSX", "main.js")) == "Index.JSX"


def test_detect_main_file_honours_flag_and_falls_back() -> None:
    flagged = [ImportFile("a.js", ""), ImportFile("b.js", "", is_main=True)]
    assert detect_main_file(flagged) == "b.js"
    assert detect_main_file(_files("b.js", "a.js")) == "b.js"
    assert detect_main_file([]) == ""


@pytest.mark.parametrize(
    ("framework", "names", "expected"),
    [
        ("React", ["c.tsx"], "TSX"),
        ("React", ["c.jsx"], "JSX"),
        ("Vue", ["c.vue"], "Vue"),
        ("Flutter", ["c.dart"], "Dart"),
        ("Angular", ["c.ts"], "TypeScript"),
        ("JavaScript", ["c.ts"], "TypeScript"),
        ("JavaScript", ["c.js"], "JavaScript"),
        ("HTML", ["c.html"], "HTML"),
    ],
)
def test_detect_language(framework: str, names: list[str], expected: str) -> None:
    assert detect_language(framework, _files(*names)) == expected


def test_snippet_helpers() -> None:
    assert snippet_extension("JavaScript") == "js"
    assert snippet_extension("kotlin") == "kt"
    assert snippet_extension("cobol") == "js"
    assert snippet_extension(None) == "js"
    assert snippet_language("react") == "JSX"
    assert snippet_language("cobol") == "cobol"
    assert snippet_framework("javascript") == "JavaScript"
    assert snippet_framework(None) == "JavaScript"
    assert snippet_framework("Elm") == "Elm"

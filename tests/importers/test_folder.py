"""Tests for reading import input from disk."""

from __future__ import annotations

from pathlib import Path

import pytest

from componentlab.importers import read_files, read_folder


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_read_folder_collects_source_files_recursively(tmp_path: Path) -> None:
    folder = tmp_path / "FancyCard"
    _write(folder / "index.jsx", "export default () => null;\n")
    _write(folder / "styles" / "card.css", ".card {}\n")
    _write(folder / "node_modules" / "dep" / "index.js", "module.exports = 1;\n")
    _write(folder / "build" / "bundle.js", "compiled\n")
    _write(folder / "logo.png", "binary-ish\n")

    payload = read_folder(folder)

    assert payload.name == "FancyCard"
    names = [file.name for file in payload.files]
    assert names == ["index.jsx", "styles/card.css"]
    assert payload.files[0].is_main is True
    assert payload.files[1].is_main is False


def test_read_folder_honours_configured_filters(tmp_path: Path) -> None:
    folder = tmp_path / "lib"
    _write(folder / "a.js", "1")
    _write(folder / "vendor" / "b.js", "2")
    _write(folder / "notes.txt", "3")

    payload = read_folder(folder, extensions=[".js", ".txt"], skip_dirs=["vendor"])

    assert [file.name for file in payload.files] == ["a.js", "notes.txt"]


def test_read_folder_rejects_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_folder(tmp_path / "missing")


def test_read_files_uses_base_names_and_skips_unreadable(tmp_path: Path) -> None:
    _write(tmp_path / "deep" / "main.ts", "export {};\n")
    _write(tmp_path / "helper.ts", "export const h = 1;\n")

    files = read_files([tmp_path / "helper.ts", tmp_path / "deep" / "main.ts", tmp_path / "gone.ts"])

    assert [file.name for file in files] == ["helper.ts", "main.ts"]
    assert [file.is_main for file in files] == [False, True]


def test_read_folder_skips_top_level_metadata_name(tmp_path: Path) -> None:
    folder = tmp_path / "Exported"
    _write(folder / "meta.json", '{"id": "other"}')
    _write(folder / "index.js", "export default 1;\n")
    _write(folder / "data" / "meta.json", "{}")

    payload = read_folder(folder)

    assert [file.name for file in payload.files] == ["index.js", "data/meta.json"]

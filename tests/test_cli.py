# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""Tests for the command-line interface."""

import json

import pytest

from chromaforge.__main__ import main
from chromaforge.codec import read_document, write_document
from chromaforge.schema import Color, ColorModel, ColorType, Document, GroupEnd, GroupStart


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "CHROMAFORGE_CMYK_PROFILE",
        "CHROMAFORGE_SRGB_PROFILE",
        "CHROMAFORGE_REFERENCES",
        "CHROMAFORGE_TOLERANCE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def palette(tmp_path):
    doc = Document(blocks=[
        GroupStart("Brand"),
        Color("Zeta", ColorModel.RGB, (1.0, 0.2, 0.2), ColorType.PROCESS),
        Color("Alpha", ColorModel.CMYK, (1.0, 1.0, 0.0, 0.0), ColorType.SPOT),
        GroupEnd(),
    ])
    return write_document(doc, tmp_path / "palette.ase")


class TestInfo:

    def test_text(self, palette, capsys):
        assert main(["info", str(palette)]) == 0
        out = capsys.readouterr().out
        assert "Version 1.0: 4 blocks, 1 groups, 2 colors" in out
        assert "#FF3333" in out

    def test_json(self, palette, capsys):
        assert main(["info", str(palette), "--json"]) == 0
        info = json.loads(capsys.readouterr().out)
        assert [s["name"] for s in info["swatches"]] == ["Zeta", "Alpha"]

    def test_references_option(self, palette, tmp_path, capsys):
        refs = tmp_path / "refs.json"
        refs.write_text(json.dumps([{"name": "zeta", "hex": "#F93A3F"}]), encoding="utf-8")
        assert main(["--references", str(refs), "info", str(palette), "-j"]) == 0
        zeta = json.loads(capsys.readouterr().out)["swatches"][0]
        assert zeta["hex"] == "#F93A3F"
        assert zeta["verified"] is True


class TestEdits:

    def test_sort_to_output(self, palette, tmp_path, capsys):
        out_path = tmp_path / "sorted.ase"
        assert main(["sort", str(palette), "-o", str(out_path)]) == 0
        assert "Sorted 4 blocks by name (groups preserved)" in capsys.readouterr().out
        names = [c.name for c in read_document(out_path).colors()]
        assert names == ["Alpha", "Zeta"]
        # input untouched
        assert [c.name for c in read_document(palette).colors()] == ["Zeta", "Alpha"]

    def test_convert_in_place(self, palette, capsys):
        assert main(["convert", str(palette), "set-global"]) == 0
        assert "Updated 1 swatches" in capsys.readouterr().out
        types = [c.color_type for c in read_document(palette).colors()]
        assert types == [ColorType.GLOBAL, ColorType.SPOT]

    def test_convert_nothing_eligible(self, palette, capsys):
        assert main(["convert", str(palette), "lab-rgb"]) == 0
        assert "No eligible swatches found" in capsys.readouterr().out

    def test_merge(self, palette, tmp_path, capsys):
        other = write_document(
            Document(blocks=[Color("alpha"), Color("New", ColorModel.GRAY, (0.5,))]),
            tmp_path / "other.ase",
        )
        assert main(["merge", str(palette), str(other)]) == 0
        assert "Merged 1 unique swatches" in capsys.readouterr().out
        assert len(read_document(palette)) == 5

    def test_css(self, palette, capsys):
        assert main(["css", str(palette), "--selector", ".brand"]) == 0
        out = capsys.readouterr().out
        assert out.startswith(".brand {")
        assert "--zeta: #FF3333;" in out
        assert "--alpha: #0000FF;" in out


class TestErrors:

    def test_missing_file(self, tmp_path, capsys):
        assert main(["info", str(tmp_path / "none.ase")]) == 1
        assert capsys.readouterr().err.startswith("error:")

    def test_not_a_palette(self, tmp_path, capsys):
        bad = tmp_path / "bad.ase"
        bad.write_bytes(b"PNG\x00garbage")
        assert main(["info", str(bad)]) == 1
        assert "error:" in capsys.readouterr().err

    def test_unknown_action(self, palette):
        with pytest.raises(SystemExit):
            main(["convert", str(palette), "rgb-hsv"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])

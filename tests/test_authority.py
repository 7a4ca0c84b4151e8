# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""Tests for the reference color table."""

import json

import pytest

from chromaforge.authority import AuthorityTable, ReferenceEntry, normalize_name
from chromaforge.errors import ReferenceDataError
from chromaforge.schema import Color, ColorModel


@pytest.fixture
def red():
    return ReferenceEntry(
        name="ChromaForge Red",
        hex="#F93A3F",
        rgb=(255, 51, 51),
        cmyk=(0, 80, 80, 0),
    )


@pytest.fixture
def table(red):
    return AuthorityTable([red])


class TestReferenceEntry:

    def test_srgb(self, red):
        assert red.srgb == pytest.approx((0xF9 / 255, 0x3A / 255, 0x3F / 255))

    def test_normalized_values(self, red):
        assert red.normalized_values(ColorModel.RGB) == pytest.approx((1.0, 0.2, 0.2))
        assert red.normalized_values(ColorModel.CMYK) == pytest.approx((0.0, 0.8, 0.8, 0.0))
        assert red.normalized_values(ColorModel.LAB) is None

    def test_empty_name_rejected(self):
        with pytest.raises(ReferenceDataError):
            ReferenceEntry(name="  ", hex="#000000")

    def test_bad_hex_rejected(self):
        with pytest.raises(ReferenceDataError):
            ReferenceEntry(name="X", hex="red")

    def test_from_dict_string_numbers(self):
        entry = ReferenceEntry.from_dict(
            {"name": "Blue", "Hex": "#0000FF", "R": "0", "G": "0", "B": "255"}
        )
        assert entry.rgb == (0.0, 0.0, 255.0)
        assert entry.cmyk is None

    def test_from_dict_partial_group_dropped(self):
        entry = ReferenceEntry.from_dict({"name": "Blue", "hex": "#0000FF", "C": 100, "M": 50})
        assert entry.cmyk is None

    def test_from_dict_missing_hex(self):
        with pytest.raises(ReferenceDataError):
            ReferenceEntry.from_dict({"name": "Blue"})

    def test_from_dict_non_numeric(self):
        with pytest.raises(ReferenceDataError):
            ReferenceEntry.from_dict({"name": "B", "hex": "#000000", "R": "x", "G": 0, "B": 0})

    def test_dict_roundtrip(self, red):
        assert ReferenceEntry.from_dict(red.to_dict()) == red

    def test_reference_data_error_is_value_error(self):
        with pytest.raises(ValueError):
            ReferenceEntry(name="", hex="#000000")


class TestLookup:

    def test_normalize_name(self):
        assert normalize_name("  ChromaForge RED ") == "chromaforge red"

    def test_lookup_case_and_space_insensitive(self, table, red):
        assert table.lookup(" chromaforge red") is red
        assert "CHROMAFORGE RED" in table

    def test_missing(self, table):
        assert table.lookup("Chromaforge Redd") is None
        assert 42 not in table

    def test_len_iter(self, table, red):
        assert len(table) == 1
        assert list(table) == [red]

    def test_empty(self):
        assert len(AuthorityTable.empty()) == 0

    def test_later_entry_replaces_earlier(self):
        a = ReferenceEntry(name="Dup", hex="#000000")
        b = ReferenceEntry(name="dup", hex="#FFFFFF")
        assert AuthorityTable([a, b]).lookup("DUP") is b

    def test_immutable(self, table):
        with pytest.raises(TypeError):
            table._entries["x"] = None


class TestMatching:

    def test_rgb_within_tolerance(self, table):
        c = Color("ChromaForge Red", ColorModel.RGB, (1.0, 0.205, 0.195))
        assert table.is_authoritative(c)

    def test_rgb_outside_tolerance(self, table):
        c = Color("ChromaForge Red", ColorModel.RGB, (1.0, 0.22, 0.2))
        assert not table.is_authoritative(c)

    def test_tolerance_is_strict(self):
        entry = ReferenceEntry(name="Half", hex="#808080", rgb=(127.5, 127.5, 127.5))
        table = AuthorityTable([entry], tolerance=0.25)
        assert table.is_authoritative(Color("Half", ColorModel.RGB, (0.5, 0.5, 0.5)))
        assert not table.is_authoritative(Color("Half", ColorModel.RGB, (0.75, 0.5, 0.5)))

    def test_cmyk_scale(self, table):
        c = Color("ChromaForge Red", ColorModel.CMYK, (0.0, 0.8, 0.8, 0.0))
        assert table.is_authoritative(c)
        c.values = (0.0, 0.8, 0.8, 0.05)
        assert not table.is_authoritative(c)

    def test_lab_and_gray_name_only(self, table):
        assert table.is_authoritative(Color("ChromaForge Red", ColorModel.LAB, (1.0, 2.0, 3.0)))
        assert table.is_authoritative(Color("ChromaForge Red", ColorModel.GRAY, (0.1,)))

    def test_unsupported_model_never(self, table):
        assert not table.is_authoritative(Color("ChromaForge Red", None, ()))

    def test_model_numbers_missing_is_authoritative(self):
        entry = ReferenceEntry(name="Override", hex="#FF10F0")
        table = AuthorityTable([entry])
        assert table.is_authoritative(Color("Override", ColorModel.RGB, (0.0, 0.0, 0.0)))

    def test_partial_numbers_do_not_override(self):
        entry = ReferenceEntry(name="Rgb Only", hex="#FF3333", rgb=(255, 51, 51))
        table = AuthorityTable([entry])
        assert not entry.is_override
        assert not table.is_authoritative(Color("Rgb Only", ColorModel.CMYK, (0.3, 0.3, 0.3, 0.3)))
        assert table.is_authoritative(Color("Rgb Only", ColorModel.RGB, (1.0, 0.2, 0.2)))

    def test_lab_only_entry_does_not_override_cmyk(self):
        entry = ReferenceEntry(name="Lab Only", hex="#808080", lab=(50.0, 0.0, 0.0))
        table = AuthorityTable([entry])
        assert not table.is_authoritative(Color("Lab Only", ColorModel.CMYK, (0.0, 0.0, 0.0, 0.5)))
        assert table.is_authoritative(Color("Lab Only", ColorModel.LAB, (1.0, 2.0, 3.0)))

    def test_unnamed_never(self, table):
        assert table.resolve(Color("", ColorModel.GRAY, (0.5,))) is None
        assert table.resolve(Color("   ", ColorModel.GRAY, (0.5,))) is None

    def test_resolve_returns_entry(self, table, red):
        assert table.resolve(Color("chromaforge red", ColorModel.LAB, (50.0, 0.0, 0.0))) is red


class TestLoading:

    def test_from_json_list(self, tmp_path, red):
        path = tmp_path / "refs.json"
        path.write_text(json.dumps([red.to_dict()]), encoding="utf-8")
        table = AuthorityTable.from_json(path)
        assert table.lookup("ChromaForge Red") == red

    def test_from_json_entries_key(self, tmp_path):
        path = tmp_path / "refs.json"
        path.write_text(json.dumps({"entries": [{"name": "A", "hex": "#010203"}]}), encoding="utf-8")
        assert len(AuthorityTable.from_json(path, tolerance=0.05)) == 1

    def test_from_json_invalid(self, tmp_path):
        path = tmp_path / "refs.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ReferenceDataError):
            AuthorityTable.from_json(path)

    def test_from_json_wrong_shape(self, tmp_path):
        path = tmp_path / "refs.json"
        path.write_text(json.dumps({"name": "A"}), encoding="utf-8")
        with pytest.raises(ReferenceDataError):
            AuthorityTable.from_json(path)

    def test_from_json_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            AuthorityTable.from_json(tmp_path / "none.json")

    def test_tolerance_applied(self, red):
        table = AuthorityTable.from_records([red.to_dict()], tolerance=0.1)
        assert table.tolerance == 0.1
        assert table.is_authoritative(Color("ChromaForge Red", ColorModel.RGB, (0.95, 0.25, 0.2)))

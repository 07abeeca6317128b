"""
Tests for dict.py - dictionary parsing and the Dictionary index.
"""

import pytest

from kanaime.dict import Dictionary, FormatError, build, parse_line, split_candidates


class TestParseLine:
    """Tests for single-line parsing."""
    
    def test_data_line(self):
        assert parse_line("かんじ /漢字/幹事/") == ("かんじ", ["漢字", "幹事"])
    
    def test_annotation_stripped(self):
        assert parse_line("かんじ /感じ;feeling/漢字/") == ("かんじ", ["感じ", "漢字"])
    
    def test_katakana_reading_folded(self):
        assert parse_line("ニホンゴ /日本語/") == ("にほんご", ["日本語"])
    
    def test_comment(self):
        assert parse_line(";; comment") is None
    
    def test_blank(self):
        assert parse_line("") is None
    
    def test_no_reading(self):
        assert parse_line("/漢字/") is None
        assert parse_line(" /漢字/") is None
    
    def test_no_slashes(self):
        assert parse_line("かんじ 漢字") is None
    
    def test_only_empty_segments(self):
        assert parse_line("かんじ /;note//") is None
    
    def test_split_candidates(self):
        assert split_candidates("a// b ;x/c") == ["a", "b", "c"]


class TestBuild:
    """Tests for build()."""
    
    def test_spec_example(self):
        d = build(";; comment\nかんじ /漢字/幹事/\n")
        assert d["かんじ"] == ("漢字", "幹事")
        assert len(d) == 1
    
    def test_malformed_line_ignored(self):
        d = build(";; c\n/漢字/\nかんじ /漢字/幹事/\ngarbage\n")
        assert list(d) == ["かんじ"]
        assert d["かんじ"] == ("漢字", "幹事")
    
    def test_duplicate_reading_appends(self, sample_dictionary):
        assert sample_dictionary["かんじ"] == ("漢字", "幹事", "感じ", "監事")
    
    def test_no_duplicates_in_list(self):
        d = build(";\nあい /愛/藍/愛/\nあい /藍/哀/\n")
        assert d["あい"] == ("愛", "藍", "哀")
    
    def test_crlf(self):
        d = build(";\r\nかんじ /漢字/\r\n")
        assert d["かんじ"] == ("漢字",)
    
    def test_source_without_header_still_builds(self):
        d = build("かんじ /漢字/\n")
        assert d.lookup("かんじ") == ("漢字",)
    
    def test_empty_source(self):
        with pytest.raises(FormatError) as exc_info:
            build("  \n")
        assert exc_info.value.cause == "empty_payload"
        assert exc_info.value.stage == "build"
    
    def test_html_source(self):
        with pytest.raises(FormatError) as exc_info:
            build("<!DOCTYPE html>\n<html><body>404</body></html>")
        assert exc_info.value.cause == "html_payload"
        assert "DOCTYPE" in exc_info.value.preview


class TestDictionary:
    """Tests for the read-only mapping."""
    
    def test_lookup_miss(self, sample_dictionary):
        assert sample_dictionary.lookup("ないよ") == ()
    
    def test_values_are_tuples(self, sample_dictionary):
        assert all(isinstance(v, tuple) for v in sample_dictionary.values())
    
    def test_read_only(self, sample_dictionary):
        with pytest.raises(TypeError):
            sample_dictionary["かんじ"] = ("x",)
    
    def test_copy_of_input(self):
        source = {"あ": ["亜"]}
        d = Dictionary(source)
        source["あ"].append("阿")
        assert d["あ"] == ("亜",)

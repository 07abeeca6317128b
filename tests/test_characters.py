"""
Tests for characters.py - kana classification and conversion.
"""

from kanaime.characters import (
    as_hiragana,
    as_katakana,
    collapse_long_vowels,
    is_hiragana,
    is_hiragana_char,
    is_kana_char,
    is_katakana_char,
    is_long_vowel_mark,
)


class TestClassification:
    """Tests for the code-point range checks."""
    
    def test_hiragana_bounds(self):
        assert is_hiragana_char("ぁ")
        assert is_hiragana_char("ゖ")
        assert not is_hiragana_char("ゝ")
        assert not is_hiragana_char("ア")
    
    def test_katakana_bounds(self):
        assert is_katakana_char("ァ")
        assert is_katakana_char("ヶ")
        assert not is_katakana_char("ー")
        assert not is_katakana_char("・")
    
    def test_long_vowel_mark(self):
        assert is_long_vowel_mark("ー")
        assert not is_long_vowel_mark("-")
    
    def test_kana_set(self):
        assert all(is_kana_char(c) for c in "あアー")
        assert not any(is_kana_char(c) for c in "漢a1 、")
    
    def test_multi_char_is_not_a_char(self):
        assert not is_hiragana_char("ああ")
    
    def test_is_hiragana_word(self):
        assert is_hiragana("らーめん")
        assert not is_hiragana("ラーメン")
        assert not is_hiragana("")


class TestConversion:
    """Tests for the hiragana/katakana shift."""
    
    def test_as_hiragana(self):
        assert as_hiragana("カタカナ") == "かたかな"
        assert as_hiragana("ラーメン") == "らーめん"
    
    def test_as_hiragana_leaves_others(self):
        assert as_hiragana("漢字abc") == "漢字abc"
    
    def test_as_katakana(self):
        assert as_katakana("ひらがな") == "ヒラガナ"
    
    def test_collapse(self):
        assert collapse_long_vowels("オウサマ") == "オーサマ"
        assert collapse_long_vowels("エエ") == "エー"
        assert collapse_long_vowels("アイ") == "アイ"

"""
Character handling and kana conversion for kanaime.

Kana classification is done with fixed Unicode code-point ranges:

    hiragana        U+3041 - U+3096  (ぁ - ゖ)
    katakana        U+30A1 - U+30F6  (ァ - ヶ)
    prolonged mark  U+30FC           (ー)

Katakana sits exactly 0x60 code points above the matching hiragana,
so conversion in either direction is a fixed shift.
"""

from typing import Dict

# ============================================================================
# Code-point Ranges
# ============================================================================

HIRAGANA_FIRST = 0x3041
HIRAGANA_LAST = 0x3096
KATAKANA_FIRST = 0x30A1
KATAKANA_LAST = 0x30F6
LONG_VOWEL_MARK = "ー"

# Distance between a hiragana character and its katakana counterpart
KATAKANA_SHIFT = 0x60

# Sokuon (gemination marker) and syllabic nasal
SOKUON = {"hiragana": "っ", "katakana": "ッ"}
NASAL = {"hiragana": "ん", "katakana": "ン"}

# Katakana vowel pairs collapsed into a vowel + prolonged mark.
# Order matters: it is the order the replacements are applied in.
LONG_VOWEL_DIGRAPHS: Dict[str, str] = {
    "アア": "アー",
    "イイ": "イー",
    "ウウ": "ウー",
    "エエ": "エー",
    "オオ": "オー",
    "オウ": "オー",
}


# ============================================================================
# Character Testing Functions
# ============================================================================

def is_hiragana_char(char: str) -> bool:
    """Check if a single character is in the hiragana block."""
    return len(char) == 1 and HIRAGANA_FIRST <= ord(char) <= HIRAGANA_LAST


def is_katakana_char(char: str) -> bool:
    """Check if a single character is in the katakana block (excluding ー)."""
    return len(char) == 1 and KATAKANA_FIRST <= ord(char) <= KATAKANA_LAST


def is_long_vowel_mark(char: str) -> bool:
    """Check if a character is the prolonged-sound mark."""
    return char == LONG_VOWEL_MARK


def is_kana_char(char: str) -> bool:
    """
    Check if a character belongs to the kana classification set.
    
    The set is hiragana, katakana and the prolonged-sound mark. It is
    the set used when scanning for a trailing reading.
    """
    return is_hiragana_char(char) or is_katakana_char(char) or is_long_vowel_mark(char)


def is_hiragana(word: str) -> bool:
    """Check if word consists entirely of hiragana (ー allowed)."""
    if not word:
        return False
    return all(is_hiragana_char(c) or is_long_vowel_mark(c) for c in word)


# ============================================================================
# Kana Conversion
# ============================================================================

def as_hiragana(text: str) -> str:
    """
    Convert katakana to hiragana.
    
    Args:
        text: Text to convert.
        
    Returns:
        Text with every katakana character shifted down to hiragana.
        Everything else, including ー, is left alone.
    """
    return ''.join(
        chr(ord(c) - KATAKANA_SHIFT) if is_katakana_char(c) else c
        for c in text
    )


def as_katakana(text: str) -> str:
    """
    Convert hiragana to katakana.
    
    Args:
        text: Text to convert.
        
    Returns:
        Text with every hiragana character shifted up to katakana.
    """
    return ''.join(
        chr(ord(c) + KATAKANA_SHIFT) if is_hiragana_char(c) else c
        for c in text
    )


def collapse_long_vowels(text: str) -> str:
    """
    Replace doubled katakana vowels with the prolonged-sound mark.
    
    アア→アー, イイ→イー, ウウ→ウー, エエ→エー, オオ→オー and オウ→オー.
    No other pair is touched.
    """
    for digraph, replacement in LONG_VOWEL_DIGRAPHS.items():
        text = text.replace(digraph, replacement)
    return text

"""
Reading extraction for kanaime.

Finds the kana span at the end of a text buffer and turns it into a
lookup key (a hiragana reading).
"""

from typing import Optional

from kanaime.characters import as_hiragana, is_kana_char
from kanaime.settings import MIN_READING_LENGTH


def trailing_kana(text: str) -> str:
    """
    Return the maximal run of kana characters at the end of text.
    
    Hiragana, katakana and ー all count as kana. The run is returned
    as-is, without folding katakana.
    """
    if not text:
        return ''
    start = len(text)
    while start > 0 and is_kana_char(text[start - 1]):
        start -= 1
    return text[start:]


def extract_reading(text: Optional[str] = None,
                    reading: Optional[str] = None,
                    min_length: int = MIN_READING_LENGTH) -> Optional[str]:
    """
    Produce the reading to look up for a suggestion request.
    
    Args:
        text: Free text; its trailing kana run is used.
        reading: Explicit reading. Takes precedence over text and is
            used verbatim.
        min_length: Readings shorter than this are rejected.
        
    Returns:
        The hiragana reading, or None when there is nothing to look up.
    """
    if reading:
        candidate = reading
    else:
        candidate = as_hiragana(trailing_kana(text or ''))
    
    if not candidate or len(candidate) < max(min_length, 1):
        return None
    return candidate

"""
Deromanize module for kanaime.

Converts romanized Japanese (romaji) typed by the user to kana.

The scan is a single left-to-right pass with longest-match lookups in
the rule table, plus two special cases handled before the lookup:

- ``nn`` and ``n'`` produce the syllabic nasal (ん).
- A doubled consonant other than ``n`` produces the geminate marker (っ)
  and only consumes the first letter.

A bare ``n`` is never turned into ん on its own, so ``kan`` stays ``かn``
until the user types the second ``n``.
"""

import csv
import logging
import unicodedata
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from kanaime.characters import (
    NASAL, SOKUON, as_katakana, collapse_long_vowels,
)
from kanaime.settings import ROMAJI_MAP_PATH

logger = logging.getLogger(__name__)


class KanaMode(str, Enum):
    """Output script for the transliterator."""
    HIRAGANA = "hiragana"
    KATAKANA = "katakana"


# ============================================================================
# Romaji Mapping
# ============================================================================

# Letters that geminate when doubled ('n' is handled separately)
CONSONANTS = frozenset("bcdfghjklmnpqrstvwxyz")

# Longest romaji key in the built-in table
MAX_KEY_LENGTH = 4

BUILTIN_ROMAJI_MAP: Dict[str, str] = {
    # Vowels
    'a': 'あ', 'i': 'い', 'u': 'う', 'e': 'え', 'o': 'お',
    
    # K-row
    'ka': 'か', 'ki': 'き', 'ku': 'く', 'ke': 'け', 'ko': 'こ',
    'kya': 'きゃ', 'kyu': 'きゅ', 'kyo': 'きょ',
    'ga': 'が', 'gi': 'ぎ', 'gu': 'ぐ', 'ge': 'げ', 'go': 'ご',
    'gya': 'ぎゃ', 'gyu': 'ぎゅ', 'gyo': 'ぎょ',
    
    # S-row
    'sa': 'さ', 'shi': 'し', 'su': 'す', 'se': 'せ', 'so': 'そ',
    'sha': 'しゃ', 'shu': 'しゅ', 'sho': 'しょ',
    'za': 'ざ', 'ji': 'じ', 'zu': 'ず', 'ze': 'ぜ', 'zo': 'ぞ',
    'ja': 'じゃ', 'ju': 'じゅ', 'jo': 'じょ',
    
    # T-row
    'ta': 'た', 'chi': 'ち', 'tsu': 'つ', 'te': 'て', 'to': 'と',
    'cha': 'ちゃ', 'chu': 'ちゅ', 'cho': 'ちょ',
    'da': 'だ', 'de': 'で', 'do': 'ど',
    
    # N-row
    'na': 'な', 'ni': 'に', 'nu': 'ぬ', 'ne': 'ね', 'no': 'の',
    'nya': 'にゃ', 'nyu': 'にゅ', 'nyo': 'にょ',
    
    # H-row
    'ha': 'は', 'hi': 'ひ', 'fu': 'ふ', 'he': 'へ', 'ho': 'ほ',
    'hya': 'ひゃ', 'hyu': 'ひゅ', 'hyo': 'ひょ',
    'ba': 'ば', 'bi': 'び', 'bu': 'ぶ', 'be': 'べ', 'bo': 'ぼ',
    'bya': 'びゃ', 'byu': 'びゅ', 'byo': 'びょ',
    'pa': 'ぱ', 'pi': 'ぴ', 'pu': 'ぷ', 'pe': 'ぺ', 'po': 'ぽ',
    'pya': 'ぴゃ', 'pyu': 'ぴゅ', 'pyo': 'ぴょ',
    
    # M-row
    'ma': 'ま', 'mi': 'み', 'mu': 'む', 'me': 'め', 'mo': 'も',
    'mya': 'みゃ', 'myu': 'みゅ', 'myo': 'みょ',
    
    # Y-row
    'ya': 'や', 'yu': 'ゆ', 'yo': 'よ',
    
    # R-row
    'ra': 'ら', 'ri': 'り', 'ru': 'る', 're': 'れ', 'ro': 'ろ',
    'rya': 'りゃ', 'ryu': 'りゅ', 'ryo': 'りょ',
    
    # W-row
    'wa': 'わ', 'wi': 'うぃ', 'we': 'うぇ', 'wo': 'を',
    
    # Foreign sounds
    'fa': 'ふぁ', 'fi': 'ふぃ', 'fe': 'ふぇ', 'fo': 'ふぉ',
    'va': 'ゔぁ', 'vi': 'ゔぃ', 'vu': 'ゔ', 've': 'ゔぇ', 'vo': 'ゔぉ',
    
    # Small vowels
    'xa': 'ぁ', 'xi': 'ぃ', 'xu': 'ぅ', 'xe': 'ぇ', 'xo': 'ぉ',
    
    # Small ya/yu/yo
    'xya': 'ゃ', 'xyu': 'ゅ', 'xyo': 'ょ',
    
    # Small tsu
    'xtu': 'っ', 'xtsu': 'っ', 'ltsu': 'っ',
}


def load_romaji_map(path: Union[str, Path]) -> Dict[str, str]:
    """
    Load a romaji mapping from a tab-separated file.
    
    Each row is ``romaji<TAB>kana``. Rows with a missing column, or a
    key longer than MAX_KEY_LENGTH, are ignored.
    
    Args:
        path: Path to the TSV file.
        
    Returns:
        Mapping from lowercase romaji to hiragana.
    """
    mapping: Dict[str, str] = {}
    
    with open(path, 'r', encoding='utf-8') as f:
        reader = csv.reader(f, delimiter='\t')
        for row in reader:
            if len(row) < 2:
                continue
            romaji = row[0].strip().lower()
            kana = row[1].strip()
            if romaji and kana and len(romaji) <= MAX_KEY_LENGTH:
                mapping[romaji] = kana
    
    logger.info(f"Loaded {len(mapping)} romaji rules from {path}")
    return mapping


class RuleTable:
    """
    Romaji → kana rules with longest-prefix matching.
    
    Keys are kept grouped by length so a lookup only probes the slices
    of the input that could possibly match, longest first.
    """
    
    def __init__(self, mapping: Dict[str, str]):
        self._map = dict(mapping)
        self._lengths = sorted({len(k) for k in self._map}, reverse=True)
    
    def __len__(self) -> int:
        return len(self._map)
    
    def __contains__(self, key: str) -> bool:
        return key in self._map
    
    def keys(self) -> List[str]:
        """Return the keys sorted by descending length."""
        return sorted(self._map, key=len, reverse=True)
    
    def match(self, text: str, start: int) -> Optional[Tuple[str, int]]:
        """
        Find the longest key that is a prefix of ``text[start:]``.
        
        Returns:
            ``(kana, key_length)`` or None if no key matches.
        """
        for length in self._lengths:
            if start + length > len(text):
                continue
            kana = self._map.get(text[start:start + length])
            if kana is not None:
                return kana, length
        return None


_default_table: Optional[RuleTable] = None


def get_rule_table() -> RuleTable:
    """Return the shared rule table, loading it on first use."""
    global _default_table
    
    if _default_table is None:
        if ROMAJI_MAP_PATH is not None and ROMAJI_MAP_PATH.exists():
            _default_table = RuleTable(load_romaji_map(ROMAJI_MAP_PATH))
        else:
            _default_table = RuleTable(BUILTIN_ROMAJI_MAP)
    return _default_table


# ============================================================================
# Romaji to Kana Conversion
# ============================================================================

def convert(text: str,
            mode: Union[KanaMode, str] = KanaMode.HIRAGANA,
            table: Optional[RuleTable] = None) -> str:
    """
    Convert romanized text to kana.
    
    Args:
        text: Romanized Japanese text.
        mode: ``hiragana`` or ``katakana``.
        table: Rule table to use. Defaults to the shared table.
        
    Returns:
        Converted text. Characters no rule covers are passed through.
        
    Raises:
        ValueError: If mode is not a known KanaMode.
        
    Example:
        >>> convert("kon'nichiha")
        'こんにちは'
        >>> convert("ko-hi-", "katakana")
        'コ-ヒ-'
    """
    mode = KanaMode(mode)
    katakana = mode is KanaMode.KATAKANA
    if table is None:
        table = get_rule_table()
    
    s = unicodedata.normalize('NFKC', text or '').lower()
    script = mode.value
    result = []
    i = 0
    
    while i < len(s):
        ch = s[i]
        nxt = s[i + 1] if i + 1 < len(s) else ''
        
        # ん only on "nn" or "n'"; a single n is left for na/ni/nya...
        if ch == 'n' and nxt in ('n', "'"):
            result.append(NASAL[script])
            i += 2
            continue
        
        # Doubled consonant -> っ, the second letter starts the next syllable
        if ch in CONSONANTS and ch != 'n' and ch == nxt:
            result.append(SOKUON[script])
            i += 1
            continue
        
        hit = table.match(s, i)
        if hit is not None:
            kana, length = hit
            result.append(as_katakana(kana) if katakana else kana)
            i += length
            continue
        
        # Keep the character as-is
        result.append(ch)
        i += 1
    
    converted = ''.join(result)
    if katakana:
        converted = collapse_long_vowels(converted)
    return converted


def romaji_to_hiragana(text: str) -> str:
    """Convert romanized text to hiragana."""
    return convert(text, KanaMode.HIRAGANA)


def romaji_to_katakana(text: str) -> str:
    """Convert romanized text to katakana, collapsing long vowels."""
    return convert(text, KanaMode.KATAKANA)

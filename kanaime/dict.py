"""
Dictionary index for kanaime.

Parses SKK-style dictionary source text into an immutable mapping from
hiragana reading to an ordered tuple of candidates.

Source format::

    ;; comment lines start with a semicolon
    かんじ /漢字/幹事/感じ;feeling/

Each candidate may carry an annotation after ``;`` which is dropped.
"""

import logging
import re
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from kanaime.characters import as_hiragana
from kanaime.settings import PREVIEW_LENGTH

logger = logging.getLogger(__name__)

# <reading><whitespace>/<cand1>/<cand2>/.../
_ENTRY_PATTERN = re.compile(r'^(\S+)\s+/(.+)/\s*$')

# Markers of an HTML page served in place of the dictionary
_HTML_PATTERN = re.compile(r'^\s*<(!doctype\s+html|html[\s>])', re.IGNORECASE)

COMMENT_MARKER = ';'
ANNOTATION_SEPARATOR = ';'


class FormatError(ValueError):
    """
    The dictionary payload is not a dictionary.
    
    Raised once, at load time, when the payload cannot be decoded or is
    clearly something else (an error page, an empty response).
    
    Attributes:
        stage: Where it failed: 'read', 'decode' or 'build'.
        cause: Machine-readable cause code.
        preview: The first characters/bytes of the observed input.
    """
    
    def __init__(self, message: str, stage: str, cause: str, preview: str = ''):
        super().__init__(message)
        self.stage = stage
        self.cause = cause
        self.preview = preview
    
    def __str__(self) -> str:
        base = super().__str__()
        if self.preview:
            return f'[{self.stage}] {base} (preview: "{self.preview}")'
        return f'[{self.stage}] {base}'


def make_preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    """Shorten text for error messages, flattening newlines."""
    return text[:length].replace('\r', ' ').replace('\n', ' ')


def looks_like_html(text: str) -> bool:
    """Check if text starts like an HTML document."""
    return bool(_HTML_PATTERN.match(text.lstrip('\ufeff')))


# ============================================================================
# Dictionary
# ============================================================================

class Dictionary(Mapping[str, Tuple[str, ...]]):
    """
    Read-only reading → candidates index.
    
    Lists are stored as tuples so neither the mapping nor its values
    can be changed after build().
    """
    
    def __init__(self, entries: Optional[Mapping[str, Tuple[str, ...]]] = None):
        self._entries: Dict[str, Tuple[str, ...]] = {
            reading: tuple(candidates)
            for reading, candidates in (entries or {}).items()
        }
    
    def __getitem__(self, reading: str) -> Tuple[str, ...]:
        return self._entries[reading]
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
    
    def __len__(self) -> int:
        return len(self._entries)
    
    def __repr__(self) -> str:
        return f'Dictionary(entries={len(self._entries)})'
    
    def lookup(self, reading: str) -> Tuple[str, ...]:
        """Return the candidates for reading, or an empty tuple."""
        return self._entries.get(reading, ())


# ============================================================================
# Parsing
# ============================================================================

def split_candidates(segment: str) -> List[str]:
    """
    Split the slash-delimited part of a data line.
    
    Annotations after ';' are stripped and empty segments dropped.
    """
    items = []
    for part in segment.split('/'):
        candidate = part.split(ANNOTATION_SEPARATOR, 1)[0].strip()
        if candidate:
            items.append(candidate)
    return items


def parse_line(line: str) -> Optional[Tuple[str, List[str]]]:
    """
    Parse one data line.
    
    Returns:
        ``(reading, candidates)`` with the reading folded to hiragana,
        or None for comments, blank lines and malformed lines.
    """
    if not line or line.startswith(COMMENT_MARKER):
        return None
    
    m = _ENTRY_PATTERN.match(line)
    if not m:
        return None
    
    candidates = split_candidates(m.group(2))
    if not candidates:
        return None
    return as_hiragana(m.group(1)), candidates


def build(source_text: str) -> Dictionary:
    """
    Build a Dictionary from dictionary source text.
    
    Later lines for a reading that was already seen append their new
    candidates to the existing list; nothing is ever replaced.
    
    Args:
        source_text: Decoded dictionary source.
        
    Returns:
        The immutable Dictionary.
        
    Raises:
        FormatError: If the payload is empty or is an HTML document.
    """
    if not source_text or not source_text.strip():
        raise FormatError('Dictionary source is empty', stage='build', cause='empty_payload')
    if looks_like_html(source_text):
        raise FormatError(
            'Dictionary source looks like HTML',
            stage='build', cause='html_payload',
            preview=make_preview(source_text.lstrip('\ufeff')),
        )
    
    entries: Dict[str, List[str]] = {}
    # Membership sets keep the de-duplication linear for long lists
    seen: Dict[str, set] = {}
    skipped = 0
    
    for lineno, line in enumerate(source_text.splitlines(), 1):
        if not line or line.startswith(COMMENT_MARKER):
            continue
        parsed = parse_line(line)
        if parsed is None:
            skipped += 1
            logger.debug(f"Skipping malformed line {lineno}: {make_preview(line)}")
            continue
        
        reading, candidates = parsed
        existing = entries.setdefault(reading, [])
        known = seen.setdefault(reading, set())
        for candidate in candidates:
            if candidate not in known:
                known.add(candidate)
                existing.append(candidate)
    
    if skipped:
        logger.info(f"Skipped {skipped} malformed dictionary lines")
    return Dictionary(entries)

"""
Dictionary loading module for kanaime.

Reads a dictionary payload (plain or gzip), decodes it with the
configured encodings and builds the Dictionary index.

SKK dictionaries are distributed both as EUC-JP and UTF-8, so decoding
tries each configured encoding in turn and accepts the first result
that both decodes cleanly and starts with the ';' comment header.
"""

import gzip
import logging
import os
import zlib
from pathlib import Path
from typing import Optional, Sequence, Union

from kanaime.dict import (
    COMMENT_MARKER, Dictionary, FormatError, build, looks_like_html, make_preview,
)
from kanaime.settings import DICT_ENCODINGS, DICT_PATH, PREVIEW_LENGTH

logger = logging.getLogger(__name__)

GZIP_MAGIC = b'\x1f\x8b'


# ============================================================================
# Decoding
# ============================================================================

def is_gzip_payload(payload: bytes) -> bool:
    """Check if a payload is gzip compressed by its magic bytes."""
    return payload[:2] == GZIP_MAGIC


def byte_preview(payload: bytes, length: int = PREVIEW_LENGTH) -> str:
    """Render the first bytes of a payload for diagnostics."""
    return make_preview(payload[:length].decode('latin-1'), length)


def has_dictionary_header(text: str) -> bool:
    """Check that decoded text starts with the ';' comment marker."""
    stripped = text.lstrip('\ufeff').lstrip()
    return stripped.startswith(COMMENT_MARKER)


def decode_source(payload: bytes,
                  encodings: Optional[Sequence[str]] = None) -> str:
    """
    Decode a raw dictionary payload to text.
    
    Args:
        payload: Raw bytes, optionally gzip compressed.
        encodings: Encodings to try, in order. Defaults to
            settings.DICT_ENCODINGS.
        
    Returns:
        The decoded source text.
        
    Raises:
        FormatError: If the payload is empty, looks like HTML, or no
            encoding yields a valid dictionary header.
    """
    encodings = tuple(encodings or DICT_ENCODINGS)
    
    if is_gzip_payload(payload):
        try:
            payload = gzip.decompress(payload)
        except (OSError, EOFError, zlib.error) as e:
            raise FormatError(
                f'Corrupt gzip payload: {e}',
                stage='decode', cause='undecodable', preview=byte_preview(payload),
            ) from e
    
    if not payload.strip():
        raise FormatError('Dictionary payload is empty', stage='decode', cause='empty_payload')
    
    if looks_like_html(payload[:256].decode('latin-1')):
        raise FormatError(
            'Dictionary payload looks like HTML',
            stage='decode', cause='html_payload', preview=byte_preview(payload),
        )
    
    for encoding in encodings:
        try:
            text = payload.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Decoding as {encoding} failed: {e}")
            continue
        
        if has_dictionary_header(text):
            logger.debug(f"Decoded dictionary payload as {encoding}")
            return text.lstrip('\ufeff')
        logger.debug(f"Decoded as {encoding} but the ';' header is missing")
    
    raise FormatError(
        f"No encoding in {', '.join(encodings)} produced a dictionary header",
        stage='decode', cause='undecodable', preview=byte_preview(payload),
    )


# ============================================================================
# Loading
# ============================================================================

def load_dictionary_text(text: str) -> Dictionary:
    """
    Build a Dictionary from already-decoded source text.
    
    The text must pass the same header check as a decoded payload.
    
    Raises:
        FormatError: If the text is empty, HTML, or has no ';' header.
    """
    if text.strip() and not looks_like_html(text) and not has_dictionary_header(text):
        raise FormatError(
            "Dictionary source has no ';' header",
            stage='build', cause='undecodable', preview=make_preview(text),
        )
    dictionary = build(text)
    logger.info(f"Loaded {len(dictionary)} dictionary entries")
    return dictionary


def load_dictionary_bytes(payload: bytes,
                          encodings: Optional[Sequence[str]] = None) -> Dictionary:
    """
    Decode and build a Dictionary from an in-memory payload.
    
    Raises:
        FormatError: If decoding or validation fails.
    """
    dictionary = build(decode_source(payload, encodings))
    logger.info(f"Loaded {len(dictionary)} dictionary entries")
    return dictionary


def load_dictionary(path: Optional[Union[str, os.PathLike]] = None,
                    encodings: Optional[Sequence[str]] = None) -> Dictionary:
    """
    Load a Dictionary from a local file.
    
    Args:
        path: Dictionary file (plain or gzip). Defaults to settings.DICT_PATH.
        encodings: Encodings to try, in order.
        
    Returns:
        The immutable Dictionary.
        
    Raises:
        FormatError: If the file is missing or its content is invalid.
    """
    path = Path(path or DICT_PATH)
    
    if not path.is_file():
        raise FormatError(
            f'Dictionary file not found: {path}', stage='read', cause='not_found',
        )
    
    logger.info(f"Loading dictionary from {path}...")
    payload = path.read_bytes()
    return load_dictionary_bytes(payload, encodings)

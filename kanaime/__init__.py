"""
kanaime: romaji-to-kana input with kanji suggestions.

Converts typed romaji to hiragana or katakana and suggests kanji for
the kana at the end of the buffer, learning from the user's choices.
"""

from typing import Optional

__version__ = "0.1.0"


def create_service(dict_path: Optional[str] = None):
    """
    Create a SuggestionService and load its dictionary.
    
    Args:
        dict_path: Dictionary file. Defaults to settings.DICT_PATH.
        
    Returns:
        Tuple of (service, InitReport). Check ``report.ready`` before
        calling ``service.suggest``.
    
    Example:
        >>> import kanaime
        >>> service, report = kanaime.create_service("SKK-JISYO.L")
        >>> report.ready
        True
        >>> service.suggest(text="きょうのかんじ").candidates[:2]
        ['漢字', '感じ']
    """
    from pathlib import Path
    from kanaime.service import SuggestionService
    from kanaime.settings import DICT_PATH
    
    service = SuggestionService()
    report = service.initialize(Path(dict_path or DICT_PATH))
    return service, report

"""
Suggestion service for kanaime.

SuggestionService owns one Dictionary and one LearningStore and
exposes the two operations an input method needs:

- suggest(): reading → reranked, truncated candidate list
- commit():  record that the user picked a candidate

The service becomes ready exactly once, when initialize() succeeds.
A failed initialization is final; the service never retries by itself.
"""

import logging
import os
from typing import Optional, Union

from kanaime.dict import Dictionary, FormatError
from kanaime.dict_load import load_dictionary, load_dictionary_bytes, load_dictionary_text
from kanaime.learning import LearningStore, rerank
from kanaime.models import InitError, InitReport, SuggestionResult
from kanaime.reading import extract_reading
from kanaime.settings import MAX_SUGGESTIONS, MIN_READING_LENGTH

logger = logging.getLogger(__name__)

DictionarySource = Union[Dictionary, bytes, str, os.PathLike]


class NotReadyError(RuntimeError):
    """The service was used before its dictionary finished loading."""


class SuggestionService:
    """
    Kanji suggestion engine for one session.
    
    Args:
        dictionary: Prebuilt dictionary. If given, the service is ready
            immediately.
        store: Learning store to use. A fresh one is created otherwise.
        max_suggestions: Cap on returned candidates.
        min_reading_length: Shortest reading that is looked up.
    """
    
    def __init__(self,
                 dictionary: Optional[Dictionary] = None,
                 store: Optional[LearningStore] = None,
                 max_suggestions: int = MAX_SUGGESTIONS,
                 min_reading_length: int = MIN_READING_LENGTH):
        self._dictionary: Optional[Dictionary] = dictionary
        self._store = store if store is not None else LearningStore()
        self._failure: Optional[InitError] = None
        self.max_suggestions = max_suggestions
        self.min_reading_length = min_reading_length
    
    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    
    @property
    def is_ready(self) -> bool:
        return self._dictionary is not None
    
    @property
    def failure(self) -> Optional[InitError]:
        """The initialization error, if initialization failed."""
        return self._failure
    
    @property
    def dictionary(self) -> Optional[Dictionary]:
        return self._dictionary
    
    @property
    def store(self) -> LearningStore:
        return self._store
    
    @property
    def entries(self) -> int:
        """Number of readings in the loaded dictionary."""
        return len(self._dictionary) if self._dictionary is not None else 0
    
    def initialize(self, source: DictionarySource) -> InitReport:
        """
        Load the dictionary and make the service ready.
        
        Args:
            source: A built Dictionary, a path to a dictionary file, the
                raw payload bytes, or already-decoded source text.
        
        Returns:
            InitReport: ready with the entry count, or the failure.
            Calling again after either outcome returns the same report
            without loading anything.
        """
        if self.is_ready or self._failure is not None:
            return self._report()
        
        try:
            if isinstance(source, Dictionary):
                dictionary = source
            elif isinstance(source, bytes):
                dictionary = load_dictionary_bytes(source)
            elif isinstance(source, str):
                dictionary = load_dictionary_text(source)
            elif isinstance(source, os.PathLike):
                dictionary = load_dictionary(source)
            else:
                raise TypeError(f'Unsupported dictionary source: {type(source).__name__}')
        except FormatError as e:
            self._failure = InitError.from_format_error(e)
            logger.error(f"Dictionary initialization failed: {e}")
            return self._report()
        
        self._dictionary = dictionary
        logger.info(f"Suggestion service ready ({len(dictionary)} entries)")
        return self._report()
    
    def _report(self) -> InitReport:
        if self._dictionary is not None:
            return InitReport(ready=True, entries=len(self._dictionary))
        return InitReport(ready=False, entries=0, error=self._failure)
    
    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    
    def suggest(self, text: Optional[str] = None, reading: Optional[str] = None) -> SuggestionResult:
        """
        Suggest candidates for an explicit reading or the kana at the end of text.
        
        Args:
            text: Free text; its trailing kana run is the reading.
            reading: Explicit hiragana reading (takes precedence).
        
        Returns:
            SuggestionResult with at most max_suggestions candidates. An
            unknown or missing reading gives an empty result.
        
        Raises:
            NotReadyError: If called before initialize() succeeded.
        """
        if self._dictionary is None:
            raise NotReadyError('Suggestion service is not initialized')
        
        key = extract_reading(text=text, reading=reading, min_length=self.min_reading_length)
        if key is None:
            return SuggestionResult.empty()
        
        base = self._dictionary.lookup(key)
        if not base:
            logger.debug(f"No dictionary entry for {key}")
            return SuggestionResult.empty(key)
        
        ranked = rerank(key, base, self._store)
        return SuggestionResult(reading=key, candidates=ranked[:self.max_suggestions])
    
    def commit(self, reading: str, candidate: str) -> None:
        """
        Record that candidate was chosen for reading.
        
        Empty arguments are ignored. The dictionary is never modified,
        so a candidate it doesn't list for reading will not be suggested
        no matter how often it is committed.
        """
        self.learn(reading, candidate)
    
    def learn(self, reading: str, candidate: str) -> int:
        """
        Same as commit(), but return the count produced by this increment.
        
        Returns:
            The new count, or 0 when the arguments are empty.
        """
        if not reading or not candidate:
            return 0
        value = self._store.increment(reading, candidate)
        logger.debug(f"Learned {reading}|{candidate} -> {value}")
        return value

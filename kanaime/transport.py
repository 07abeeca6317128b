"""
Message adapter between a host process and SuggestionService.

The host talks in small dict messages (the same shape a browser worker
would post). MessageHandler turns each inbound message into a service
call and returns the outbound messages to send back.

Inbound::

    {"type": "init", "path": ...} | {"type": "init", "payload": b"..."}
    {"type": "suggest", "text": "..."} | {"type": "suggest", "reading": "..."}
    {"type": "commit", "reading": "...", "kanji": "..."}

Outbound::

    {"type": "ready", "stats": {"entries": n}}
    {"type": "suggest", "token": {"reading": r}, "candidates": [...]}
    {"type": "learn", "key": "r|c", "value": n}
    {"type": "error", "where": ..., "message": ...}

Requests that arrive before the service is ready are queued and
replayed, in arrival order, right after the ready message.
"""

import logging
from collections import deque
from pathlib import Path
from typing import Any, Deque, Dict, List, Optional

from kanaime.learning import KEY_SEPARATOR
from kanaime.service import SuggestionService
from kanaime.settings import DICT_PATH

logger = logging.getLogger(__name__)

Message = Dict[str, Any]


class MessageHandler:
    """Dispatch host messages to a SuggestionService."""
    
    def __init__(self, service: Optional[SuggestionService] = None):
        self.service = service if service is not None else SuggestionService()
        self._pending: Deque[Message] = deque()
    
    @property
    def pending(self) -> int:
        """Number of requests waiting for readiness."""
        return len(self._pending)
    
    def handle(self, message: Message) -> List[Message]:
        """
        Process one inbound message.
        
        Returns:
            Outbound messages, possibly none.
        """
        kind = (message or {}).get('type')
        
        if kind == 'init':
            return self._on_init(message)
        if kind not in ('suggest', 'commit'):
            logger.debug(f"Ignoring message of type {kind!r}")
            return []
        
        if not self.service.is_ready:
            if self.service.failure is None:
                self._pending.append(message)
            else:
                logger.debug(f"Dropping {kind} request, initialization failed")
            return []
        return self._dispatch(message)
    
    def _dispatch(self, message: Message) -> List[Message]:
        kind = message['type']
        try:
            if kind == 'suggest':
                return self._on_suggest(message)
            return self._on_commit(message)
        except Exception as e:
            logger.exception(f"Error handling {kind} message")
            return [{'type': 'error', 'where': kind, 'message': str(e)}]
    
    def _on_init(self, message: Message) -> List[Message]:
        if 'payload' in message:
            source = message['payload']
        elif 'source' in message:
            source = message['source']
        else:
            source = Path(message.get('path') or message.get('skkPath') or DICT_PATH)
        
        try:
            report = self.service.initialize(source)
        except Exception as e:
            logger.exception("Error during initialization")
            return [{'type': 'error', 'where': 'init', 'cause': 'internal', 'message': str(e)}]
        
        if not report.ready:
            self._pending.clear()
            error = report.error
            return [{
                'type': 'error',
                'where': 'init',
                'stage': error.where if error else 'init',
                'cause': error.cause if error else 'unknown',
                'message': error.message if error else 'initialization failed',
            }]
        
        replies = [{'type': 'ready', 'stats': {'entries': report.entries}}]
        while self._pending:
            replies.extend(self._dispatch(self._pending.popleft()))
        return replies
    
    def _on_suggest(self, message: Message) -> List[Message]:
        result = self.service.suggest(text=message.get('text'), reading=message.get('reading'))
        if not result.candidates:
            return []
        return [{
            'type': 'suggest',
            'token': {'reading': result.reading},
            'candidates': list(result.candidates),
        }]
    
    def _on_commit(self, message: Message) -> List[Message]:
        reading = message.get('reading') or ''
        candidate = message.get('kanji') or message.get('candidate') or ''
        if not reading or not candidate:
            return []
        value = self.service.learn(reading, candidate)
        return [{
            'type': 'learn',
            'key': f'{reading}{KEY_SEPARATOR}{candidate}',
            'value': value,
        }]

"""
Tests for transport.py - the host message adapter.
"""

from unittest.mock import patch

from kanaime.service import SuggestionService
from kanaime.transport import MessageHandler


class TestMessageHandler:
    """Tests for message dispatch and the ready queue."""
    
    def test_init_ready(self, sample_source):
        handler = MessageHandler()
        replies = handler.handle({"type": "init", "source": sample_source})
        assert replies == [{"type": "ready", "stats": {"entries": 4}}]
    
    def test_init_from_path(self, dict_file):
        replies = MessageHandler().handle({"type": "init", "path": str(dict_file)})
        assert replies[0]["type"] == "ready"
    
    def test_init_error(self):
        handler = MessageHandler()
        replies = handler.handle({"type": "init", "payload": b"<!DOCTYPE html>"})
        assert len(replies) == 1
        assert replies[0]["type"] == "error"
        assert replies[0]["where"] == "init"
        assert replies[0]["cause"] == "html_payload"
    
    def test_init_missing_path(self, tmp_path):
        with patch("kanaime.transport.DICT_PATH", tmp_path / "missing"):
            replies = MessageHandler().handle({"type": "init"})
        assert replies[0]["cause"] == "not_found"
    
    def test_init_default_path(self, dict_file):
        """Without a source the configured dictionary path is used."""
        with patch("kanaime.transport.DICT_PATH", dict_file):
            replies = MessageHandler().handle({"type": "init"})
        assert replies == [{"type": "ready", "stats": {"entries": 4}}]
    
    def test_queue_until_ready(self, sample_source):
        handler = MessageHandler()
        assert handler.handle({"type": "suggest", "reading": "かんじ"}) == []
        assert handler.handle({"type": "commit", "reading": "かんじ", "kanji": "監事"}) == []
        assert handler.handle({"type": "suggest", "reading": "かんじ"}) == []
        assert handler.pending == 3
        
        replies = handler.handle({"type": "init", "source": sample_source})
        assert [r["type"] for r in replies] == ["ready", "suggest", "learn", "suggest"]
        assert replies[1]["candidates"][0] == "漢字"
        assert replies[3]["candidates"][0] == "監事"
        assert handler.pending == 0
    
    def test_queue_dropped_on_failure(self):
        handler = MessageHandler()
        handler.handle({"type": "suggest", "reading": "かんじ"})
        handler.handle({"type": "init", "payload": b""})
        assert handler.pending == 0
        assert handler.handle({"type": "suggest", "reading": "かんじ"}) == []
        assert handler.pending == 0
    
    def test_suggest_message(self, service):
        replies = MessageHandler(service).handle({"type": "suggest", "text": "きょうはかんじ"})
        assert replies == []
        replies = MessageHandler(service).handle({"type": "suggest", "text": "今日かんじ"})
        assert replies == [{
            "type": "suggest",
            "token": {"reading": "かんじ"},
            "candidates": ["漢字", "幹事", "感じ", "監事"],
        }]
    
    def test_suggest_without_candidates(self, service):
        assert MessageHandler(service).handle({"type": "suggest", "reading": "ないよ"}) == []
    
    def test_commit_message(self, service):
        handler = MessageHandler(service)
        handler.handle({"type": "commit", "reading": "かんじ", "kanji": "幹事"})
        replies = handler.handle({"type": "commit", "reading": "かんじ", "candidate": "幹事"})
        assert replies == [{"type": "learn", "key": "かんじ|幹事", "value": 2}]
    
    def test_commit_value_from_increment(self, service, monkeypatch):
        monkeypatch.setattr(service.store, "count", lambda r, c: -1)
        replies = MessageHandler(service).handle({"type": "commit", "reading": "かんじ", "kanji": "幹事"})
        assert replies[0]["value"] == 1
    
    def test_commit_missing_fields(self, service):
        assert MessageHandler(service).handle({"type": "commit", "reading": "かんじ"}) == []
    
    def test_unknown_type(self, service):
        assert MessageHandler(service).handle({"type": "speak"}) == []
        assert MessageHandler(service).handle({}) == []
    
    def test_handler_error(self, service, monkeypatch):
        def boom(**kwargs):
            raise RuntimeError("boom")
        
        monkeypatch.setattr(service, "suggest", boom)
        replies = MessageHandler(service).handle({"type": "suggest", "reading": "かんじ"})
        assert replies == [{"type": "error", "where": "suggest", "message": "boom"}]
    
    def test_default_service(self):
        handler = MessageHandler()
        assert isinstance(handler.service, SuggestionService)
        assert not handler.service.is_ready

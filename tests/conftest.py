"""
Shared fixtures for kanaime tests.
"""

import pytest

from kanaime.dict import build
from kanaime.learning import LearningStore
from kanaime.service import SuggestionService


SAMPLE_SOURCE = """\
;; -*- fundamental -*- ; coding: utf-8 -*-
;; okuri-nasi entries.
かんじ /漢字/幹事/感じ;feeling/
きょう /今日/京/強/
にほん /日本/二本/
かんじ /感じ/監事/
ニホンゴ /日本語/
"""


@pytest.fixture
def sample_source():
    """Small dictionary source in SKK format."""
    return SAMPLE_SOURCE


@pytest.fixture
def sample_dictionary():
    """Dictionary built from SAMPLE_SOURCE."""
    return build(SAMPLE_SOURCE)


@pytest.fixture
def store():
    """Empty learning store."""
    return LearningStore()


@pytest.fixture
def service(sample_dictionary, store):
    """Ready suggestion service over the sample dictionary."""
    svc = SuggestionService(store=store)
    svc.initialize(sample_dictionary)
    return svc


@pytest.fixture
def dict_file(tmp_path):
    """Write SAMPLE_SOURCE to disk and return its path."""
    path = tmp_path / "SKK-JISYO.test"
    path.write_text(SAMPLE_SOURCE, encoding="utf-8")
    return path

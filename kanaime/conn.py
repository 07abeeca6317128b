"""
Learning-count persistence for kanaime.

The core keeps learned counts in memory only. Hosts that want them to
survive a restart can save and restore a LearningStore through this
module, which stores the counters in a SQLite file via SQLAlchemy.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from sqlalchemy import (
    Column, Integer, MetaData, String, Table, create_engine, delete, insert, select,
)
from sqlalchemy.engine import Engine

from kanaime.learning import LearningStore
from kanaime.settings import LEARNING_DB

logger = logging.getLogger(__name__)

metadata = MetaData()

learning_count = Table(
    'learning_count',
    metadata,
    Column('reading', String, primary_key=True),
    Column('candidate', String, primary_key=True),
    Column('count', Integer, nullable=False),
)


def get_engine(db_path: Optional[Union[str, Path]] = None) -> Engine:
    """
    Create an engine for the learning database.
    
    Args:
        db_path: Path to the SQLite file. Defaults to settings.LEARNING_DB.
        
    Returns:
        SQLAlchemy engine with the schema created.
    """
    db_path = Path(db_path or LEARNING_DB)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    
    engine = create_engine(f'sqlite:///{db_path}')
    metadata.create_all(engine)
    return engine


def save_learning(store: LearningStore, db_path: Optional[Union[str, Path]] = None) -> int:
    """
    Write every counter of a store, replacing what was saved before.
    
    Returns:
        Number of (reading, candidate) pairs written.
    """
    rows = [
        {'reading': reading, 'candidate': candidate, 'count': value}
        for (reading, candidate), value in store.items()
    ]
    
    engine = get_engine(db_path)
    try:
        with engine.begin() as conn:
            conn.execute(delete(learning_count))
            if rows:
                conn.execute(insert(learning_count), rows)
    finally:
        engine.dispose()
    
    logger.info(f"Saved {len(rows)} learned pairs to {db_path or LEARNING_DB}")
    return len(rows)


def load_learning(db_path: Optional[Union[str, Path]] = None) -> LearningStore:
    """
    Restore a store saved with save_learning().
    
    A missing database file yields an empty store.
    """
    path = Path(db_path or LEARNING_DB)
    if not path.exists():
        return LearningStore()
    
    engine = get_engine(path)
    try:
        with engine.connect() as conn:
            result = conn.execute(
                select(learning_count.c.reading, learning_count.c.candidate, learning_count.c.count)
            )
            counts = {(reading, candidate): value for reading, candidate, value in result}
    finally:
        engine.dispose()
    
    logger.info(f"Loaded {len(counts)} learned pairs from {path}")
    return LearningStore(counts)

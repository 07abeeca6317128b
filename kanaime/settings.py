"""
Settings and configuration for kanaime.

All values can be overridden through environment variables.
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"

# Dictionary source - defaults to data/SKK-JISYO.L (user must download it)
DEFAULT_DICT_PATH = DATA_DIR / "SKK-JISYO.L"
DICT_PATH = Path(os.environ.get("KANAIME_DICT_PATH", DEFAULT_DICT_PATH))

# Encodings tried in order when decoding a dictionary payload
DICT_ENCODINGS = tuple(
    enc.strip()
    for enc in os.environ.get("KANAIME_DICT_ENCODINGS", "utf-8,euc-jp").split(",")
    if enc.strip()
)

# Learned usage counts (only used when the host asks for persistence)
DEFAULT_LEARNING_DB = DATA_DIR / "learning.db"
LEARNING_DB = Path(os.environ.get("KANAIME_LEARNING_DB", DEFAULT_LEARNING_DB))

# Optional tab-separated romaji table replacing the built-in one
_romaji_map = os.environ.get("KANAIME_ROMAJI_MAP_PATH", "")
ROMAJI_MAP_PATH = Path(_romaji_map) if _romaji_map else None

# Download URL for the default dictionary
SKK_JISYO_URL = "https://skk-dev.github.io/dict/SKK-JISYO.L.gz"

# Debug mode
DEBUG = os.environ.get("KANAIME_DEBUG", "").lower() in ("1", "true", "yes")

# Maximum number of candidates returned by a suggestion
MAX_SUGGESTIONS = int(os.environ.get("KANAIME_MAX_SUGGESTIONS", "20"))

# Readings shorter than this are not looked up
MIN_READING_LENGTH = int(os.environ.get("KANAIME_MIN_READING_LENGTH", "2"))

# Number of characters/bytes shown when reporting a bad payload
PREVIEW_LENGTH = 32


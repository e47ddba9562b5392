"""Centralized constants for the trainchinese application.

All tuned numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Memory model ----------
MEMORY_DECAY_CONSTANT = 1.0887147152069994
DUE_PRIORITY = 1.0
MEDIUM_PRIORITY = 0.5

# ---------- Pool composition ----------
DEFAULT_MAX_EPHEMERAL_WORDS = 5
DEFAULT_MAX_FLEETING_WORDS = 20
DEFAULT_MAX_TOTAL_WORDS = 50

# Gradations by global level: (name, exclusive upper bound). None = open ended.
GRADATIONS: tuple[tuple[str, int | None], ...] = (
    ("ephemeral", 4),
    ("fleeting", 8),
    ("short-term", 12),
    ("transition", 16),
    ("long-term", 20),
    ("permanent", None),
)

GRADATION_LABELS = {
    "ephemeral": "Ephemeral:      (<= 16 minutes)",
    "fleeting": "Fleeting:       (<= 4 hours)",
    "short-term": "Short-term:     (<= 68 hours)",
    "transition": "Transition:     (<= 45 days)",
    "long-term": "Long-term:      (<= 2 years)",
    "permanent": "Permanent:      (>= 2 years)",
}

# ---------- Review batches ----------
DEFAULT_BATCH_SIZE = 5

# ---------- Exercises ----------
MAX_WRITTEN_ATTEMPTS = 3
MAX_TRANSLATION_ATTEMPTS = 2
MAX_SEARCH_RESULTS = 10

# ---------- Files ----------
DEFAULT_VOCABULARY_FILE = "ChineseVocabulary.txt"
DEFAULT_SAVE_FILE = "ChineseSave.json"
DEFAULT_STATS_FILE = "ChineseStats.txt"

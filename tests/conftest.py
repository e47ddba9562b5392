import random
from datetime import datetime

import pytest

from trainchinese.domain.models import Item, Outcome, Pool
from trainchinese.domain.ports import FixedClock, Trainer

START = datetime(2026, 1, 30, 12, 0, 0)


class RiggedRandom(random.Random):
    """random.Random whose random() replays a fixed sequence of draws."""

    def __init__(self, draws):
        super().__init__(0)
        self.draws = list(draws)
        self.consumed = 0

    def random(self):
        value = self.draws[self.consumed]
        self.consumed += 1
        return value


class ScriptedTrainer(Trainer):
    """Trainer that answers from a fixed outcome and records every call."""

    def __init__(self, outcome=Outcome.CORRECT, confirm=True):
        self.outcome = outcome
        self.confirm = confirm
        self.calls = []

    def confirm_new_item(self):
        self.calls.append(("confirm",))
        return self.confirm

    def present(self, item, attribute):
        self.calls.append(("present", item.id, attribute))

    def introduce(self, item, pool):
        self.calls.append(("introduce", item.id))

    def exercise_hanzi(self, item, pool):
        self.calls.append(("hanzi", item.id))
        return self.outcome

    def exercise_pinyin(self, item, pool, audio_cue=False):
        self.calls.append(("pinyin", item.id, audio_cue))
        return self.outcome

    def exercise_translation(self, item, pool):
        self.calls.append(("translation", item.id))
        return self.outcome


@pytest.fixture
def clock():
    return FixedClock(START)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_item(clock):
    """Factory for items created at the fixed clock's current time."""

    def _make(item_id="w.1", hanzi="你", pinyin="ni3", translation="you", context="", level=None):
        item = Item.new(item_id, hanzi, pinyin, translation, context, now=clock.now())
        if level is not None:
            for stats in item.tasks.values():
                stats.level = level
            item.global_level = level
        return item

    return _make


@pytest.fixture
def sample_pool(make_item):
    pool = Pool()
    for item in (
        make_item("hsk1.1", "你好", "ni3 hao3", "hello", "greeting"),
        make_item("hsk1.2", "水", "shui3", "water"),
        make_item("hsk1.3", "茶", "cha2", "tea", "drink"),
    ):
        pool.known[item.id] = item
    return pool


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Isolate config files and env overrides
    monkeypatch.setenv("HOME", str(home))
    for var in ("VOCABULARY_FILE", "SAVE_FILE", "STATS_FILE", "BATCH_SIZE", "SEED"):
        monkeypatch.delenv(f"TRAINCHINESE_{var}", raising=False)
    return home



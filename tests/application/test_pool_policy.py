"""Tests for gradations, the introduce-new-item policy and promotion."""

import random
from datetime import timedelta

import pytest

from trainchinese.application.pool_policy import (
    calculate_gradations,
    count_due,
    gradation_of,
    select_and_promote_random_unseen_item,
    should_introduce_new_item,
)
from trainchinese.domain.models import IntroduceDecision, Pool, TrainingParams


def _known_pool(make_item, clock, levels, minutes_ago):
    pool = Pool()
    for i, level in enumerate(levels):
        item = make_item(f"w.{i}", level=level)
        item.global_last_reviewed = clock.now() - timedelta(minutes=minutes_ago)
        pool.known[item.id] = item
    return pool


@pytest.mark.parametrize(
    "level,name",
    [
        (0, "ephemeral"),
        (3, "ephemeral"),
        (4, "fleeting"),
        (7, "fleeting"),
        (8, "short-term"),
        (12, "transition"),
        (16, "long-term"),
        (19, "long-term"),
        (20, "permanent"),
        (45, "permanent"),
    ],
)
def test_gradation_boundaries(level, name):
    assert gradation_of(level) == name


def test_calculate_gradations(make_item, clock):
    pool = _known_pool(make_item, clock, [0, 1, 5, 9, 13, 17, 25, 30], minutes_ago=0)
    assert calculate_gradations(pool) == {
        "ephemeral": 2,
        "fleeting": 1,
        "short-term": 1,
        "transition": 1,
        "long-term": 1,
        "permanent": 2,
    }


def test_count_due_uses_global_priority(make_item, clock):
    pool = _known_pool(make_item, clock, [1, 1, 10], minutes_ago=4)
    # level 1: 4 / 2 = 2 (due); level 10: 4 / 1024 (not due)
    assert count_due(pool, clock.now()) == 2


class TestShouldIntroduce:
    def test_nothing_due_asks_caller(self, make_item, clock):
        pool = _known_pool(make_item, clock, [2, 3], minutes_ago=0)
        decision = should_introduce_new_item(pool, TrainingParams(), clock.now())
        assert decision is IntroduceDecision.ASK_CALLER

    def test_empty_known_asks_caller(self, clock):
        decision = should_introduce_new_item(Pool(), TrainingParams(), clock.now())
        assert decision is IntroduceDecision.ASK_CALLER

    def test_ephemeral_bucket_full_blocks(self, make_item, clock):
        pool = _known_pool(make_item, clock, [1, 1, 2, 2, 3], minutes_ago=10)
        params = TrainingParams(max_ephemeral_words=5)

        assert count_due(pool, clock.now()) >= 1
        decision = should_introduce_new_item(pool, params, clock.now())
        assert decision is IntroduceDecision.DO_NOT_INTRODUCE

    def test_room_in_ephemeral_bucket_introduces(self, make_item, clock):
        pool = _known_pool(make_item, clock, [1, 2], minutes_ago=10)
        decision = should_introduce_new_item(pool, TrainingParams(max_ephemeral_words=5), clock.now())
        assert decision is IntroduceDecision.INTRODUCE

    def test_ephemeral_rule_checked_before_fleeting_cap(self, make_item, clock):
        pool = _known_pool(make_item, clock, [1, 5, 5, 5], minutes_ago=100)
        params = TrainingParams(max_ephemeral_words=2, max_fleeting_words=3)
        decision = should_introduce_new_item(pool, params, clock.now())
        assert decision is IntroduceDecision.INTRODUCE

    def test_fleeting_cap_blocks(self, make_item, clock):
        pool = _known_pool(make_item, clock, [1, 1, 5, 5], minutes_ago=100)
        params = TrainingParams(max_ephemeral_words=2, max_fleeting_words=4)
        decision = should_introduce_new_item(pool, params, clock.now())
        assert decision is IntroduceDecision.DO_NOT_INTRODUCE

    def test_due_cap_blocks(self, make_item, clock):
        pool = _known_pool(make_item, clock, [1, 1, 1], minutes_ago=100)
        params = TrainingParams(max_ephemeral_words=1, max_fleeting_words=50, max_total_words=2)
        decision = should_introduce_new_item(pool, params, clock.now())
        assert decision is IntroduceDecision.DO_NOT_INTRODUCE


class TestPromotion:
    def test_empty_new_partition_returns_none(self, sample_pool):
        before = dict(sample_pool.known)
        assert select_and_promote_random_unseen_item(sample_pool, random.Random(1)) is None
        assert sample_pool.known == before

    def test_moves_item_from_new_to_known(self, make_item):
        pool = Pool()
        for i in range(5):
            item = make_item(f"n.{i}")
            pool.new[item.id] = item

        promoted = select_and_promote_random_unseen_item(pool, random.Random(3))

        assert promoted is not None
        assert promoted.id in pool.known
        assert promoted.id not in pool.new
        assert len(pool.new) == 4
        assert set(pool.known).isdisjoint(pool.new)

    def test_promotion_drains_new_partition(self, make_item):
        pool = Pool()
        for i in range(3):
            item = make_item(f"n.{i}")
            pool.new[item.id] = item
        rng = random.Random(5)

        promoted = [select_and_promote_random_unseen_item(pool, rng) for _ in range(4)]

        assert promoted[-1] is None
        assert {item.id for item in promoted[:3]} == {"n.0", "n.1", "n.2"}
        assert pool.new == {}

    def test_same_seed_same_choice(self, make_item):
        def build():
            pool = Pool()
            for i in range(10):
                item = make_item(f"n.{i}")
                pool.new[item.id] = item
            return pool

        first = select_and_promote_random_unseen_item(build(), random.Random(11))
        second = select_and_promote_random_unseen_item(build(), random.Random(11))
        assert first.id == second.id

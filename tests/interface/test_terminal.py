"""Tests for the terminal trainer, driven by scripted answers."""

import pytest

from trainchinese.domain.models import Attribute, Outcome
from trainchinese.interface.terminal import TerminalTrainer

H, P, T = Attribute.HANZI, Attribute.PINYIN, Attribute.TRANSLATION


class FakeConsole:
    def __init__(self, answers, confirm=True):
        self.answers = list(answers)
        self.prompts = []
        self.lines = []
        self.confirm_answer = confirm

    def prompt(self, text):
        self.prompts.append(text)
        return self.answers.pop(0)

    def echo(self, message="", **kwargs):
        self.lines.append(message)

    def confirm(self, text):
        self.lines.append(text)
        return self.confirm_answer

    @property
    def output(self):
        return "\n".join(self.lines)


def _trainer(console):
    return TerminalTrainer(prompt=console.prompt, echo=console.echo, confirm=console.confirm)


@pytest.fixture
def water(sample_pool):
    return sample_pool.known["hsk1.2"]


class TestHanzi:
    @pytest.mark.parametrize(
        "answers,expected",
        [
            (["水"], Outcome.CORRECT),
            (["x", "水"], Outcome.HINT),
            (["x", "y", "水"], Outcome.INCORRECT),
            (["x", "y", "z"], Outcome.INCORRECT),
        ],
    )
    def test_grading_by_attempt(self, sample_pool, water, answers, expected):
        console = FakeConsole(answers)
        assert _trainer(console).exercise_hanzi(water, sample_pool) is expected
        assert console.prompts == ["Enter hanzi"] * len(answers)

    def test_hint_shown_before_third_try(self, sample_pool, water):
        console = FakeConsole(["x", "y", "水"])
        _trainer(console).exercise_hanzi(water, sample_pool)
        assert "Hint: 水" in console.lines

    def test_wrong_answer_matching_other_item_is_a_confusion(self, sample_pool, water):
        console = FakeConsole(["茶", "水"])
        _trainer(console).exercise_hanzi(water, sample_pool)
        assert water.confusions[H] == {"hsk1.3": 1}

    def test_failure_reveals_answer(self, sample_pool, water):
        console = FakeConsole(["x", "y", "z"])
        _trainer(console).exercise_hanzi(water, sample_pool)
        assert "Correct hanzi: 水" in console.lines


class TestPinyin:
    def test_spaces_are_ignored(self, sample_pool):
        greeting = sample_pool.known["hsk1.1"]
        console = FakeConsole(["ni3hao3"])
        assert _trainer(console).exercise_pinyin(greeting, sample_pool) is Outcome.CORRECT

    def test_confusion_with_other_pinyin(self, sample_pool, water):
        console = FakeConsole(["cha2", "shui3"])
        assert _trainer(console).exercise_pinyin(water, sample_pool) is Outcome.HINT
        assert water.confusions[P] == {"hsk1.3": 1}

    def test_audio_cue_does_not_change_prompts(self, sample_pool, water):
        console = FakeConsole(["shui3"])
        assert _trainer(console).exercise_pinyin(water, sample_pool, audio_cue=True) is Outcome.CORRECT
        assert console.prompts == ["Enter pinyin"]


class TestTranslation:
    def test_first_choice_correct(self, sample_pool, water):
        console = FakeConsole(["water", "1"])
        assert _trainer(console).exercise_translation(water, sample_pool) is Outcome.CORRECT
        assert "[1] water" in console.lines

    def test_wrong_choice_then_right(self, sample_pool, water):
        console = FakeConsole(["tea", "1", "water", "1"])
        assert _trainer(console).exercise_translation(water, sample_pool) is Outcome.HINT
        assert water.confusions[T] == {"hsk1.3": 1}

    def test_invalid_number_does_not_count(self, sample_pool, water):
        console = FakeConsole(["water", "abc", "water", "7", "water", "1"])
        assert _trainer(console).exercise_translation(water, sample_pool) is Outcome.CORRECT

    def test_no_matches_twice_fails(self, sample_pool, water):
        console = FakeConsole(["coffee", "coffee"])
        assert _trainer(console).exercise_translation(water, sample_pool) is Outcome.INCORRECT
        assert "Correct translation: water" in console.lines

    def test_two_wrong_choices_fail(self, sample_pool, water):
        console = FakeConsole(["tea", "1", "hello", "1"])
        assert _trainer(console).exercise_translation(water, sample_pool) is Outcome.INCORRECT
        assert water.confusions[T] == {"hsk1.3": 1, "hsk1.1": 1}

    def test_context_shown_with_choices(self, sample_pool):
        tea = sample_pool.known["hsk1.3"]
        console = FakeConsole(["tea", "1"])
        _trainer(console).exercise_translation(tea, sample_pool)
        assert "[1] tea (context: drink)" in console.lines


class TestPresentation:
    def test_present_shows_attribute(self, sample_pool):
        tea = sample_pool.known["hsk1.3"]
        console = FakeConsole([])
        _trainer(console).present(tea, T)
        assert "\nWord translation: tea" in console.lines
        assert "Context: drink" in console.lines

    def test_confirm_new_item(self):
        console = FakeConsole([], confirm=False)
        assert _trainer(console).confirm_new_item() is False
        assert "Add a new item?" in console.output

    def test_introduce_runs_unscored_warm_ups(self, sample_pool, water):
        console = FakeConsole(["", "水", "shui3", "water", "1"])

        _trainer(console).introduce(water, sample_pool)

        assert console.prompts == [
            "Press Enter to continue",
            "Enter hanzi",
            "Enter pinyin",
            "Keywords",
            "Number",
        ]
        assert "Hanzi: 水" in console.lines
        assert all(not water.task(*task).review_history for task in water.tasks)

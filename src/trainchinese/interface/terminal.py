"""Terminal implementation of the Trainer port."""

import logging
from collections.abc import Callable
from typing import Any

import typer

from trainchinese.application.search import find_items_by_keywords
from trainchinese.application.tracker import record_confusion
from trainchinese.application.utils.pinyin import compare_pinyin
from trainchinese.domain.constants import MAX_TRANSLATION_ATTEMPTS, MAX_WRITTEN_ATTEMPTS
from trainchinese.domain.models import Attribute, Item, Outcome, Pool
from trainchinese.domain.ports import Trainer

logger = logging.getLogger(__name__)


def _prompt(text: str) -> str:
    return typer.prompt(text, default="", show_default=False)


def _graded(attempt: int, echo: Callable[..., Any]) -> Outcome:
    if attempt == 1:
        echo("Correct on the first try!", fg="green")
        return Outcome.CORRECT
    if attempt == 2:
        echo("Correct on the second try!", fg="yellow")
        return Outcome.HINT
    echo("Correct on the third try!", fg="yellow")
    return Outcome.INCORRECT


class TerminalTrainer(Trainer):
    """
    Asks the learner through the terminal.

    Hanzi and pinyin allow three tries (the answer is shown before the
    third); translation allows two keyword searches. First try scores +1,
    second 0, anything later -1.
    """

    def __init__(
        self,
        prompt: Callable[[str], str] = _prompt,
        echo: Callable[..., Any] = typer.secho,
        confirm: Callable[[str], bool] = typer.confirm,
    ):
        self.prompt = prompt
        self.echo = echo
        self.confirm = confirm

    def _reveal(self, item: Item, attribute: Attribute) -> None:
        self.echo("Incorrect.", fg="yellow")
        self.echo(f"Correct {attribute.value.lower()}: {item.value_of(attribute)}", fg="green")
        if attribute is Attribute.TRANSLATION and item.context:
            self.echo(f"Context: {item.context}", fg="yellow")

    # ---------- Trainer port ----------

    def confirm_new_item(self) -> bool:
        return self.confirm("No high-priority items to review. Add a new item?")

    def present(self, item: Item, attribute: Attribute) -> None:
        self.echo(f"\nWord {attribute.value.lower()}: {item.value_of(attribute)}")
        if attribute is Attribute.TRANSLATION and item.context:
            self.echo(f"Context: {item.context}", fg="yellow")

    def introduce(self, item: Item, pool: Pool) -> None:
        self.echo("New word to learn:", fg="blue")
        self.echo(f"Hanzi: {item.hanzi}", fg="green")
        self.echo(f"Pinyin: {item.pinyin}", fg="green")
        self.echo(f"Translation: {item.translation}", fg="green")
        if item.context:
            self.echo(f"Context: {item.context}", fg="yellow")

        self.echo("\nTry to remember this word, then we'll start training.")
        self.prompt("Press Enter to continue")

        # Warm-up, unscored
        self.exercise_hanzi(item, pool)
        self.exercise_pinyin(item, pool, audio_cue=True)
        self.exercise_translation(item, pool)

    def exercise_hanzi(self, item: Item, pool: Pool) -> Outcome:
        self.echo("\nTask: Write the character.")

        for attempt in range(1, MAX_WRITTEN_ATTEMPTS + 1):
            if attempt == MAX_WRITTEN_ATTEMPTS:
                self.echo(f"Hint: {item.hanzi}")
            answer = self.prompt("Enter hanzi")

            if answer == item.hanzi:
                return _graded(attempt, self.echo)
            if attempt < 2:
                self.echo("Incorrect. Try again.", fg="red")
            record_confusion(item, Attribute.HANZI, answer, pool)

        self._reveal(item, Attribute.HANZI)
        return Outcome.INCORRECT

    def exercise_pinyin(self, item: Item, pool: Pool, audio_cue: bool = False) -> Outcome:
        self.echo("\nTask: Enter pinyin with tones (e.g. ni3 hao3).")
        if audio_cue:
            # No speech backend; the cue is only logged
            logger.debug(f"Audio cue requested for {item.id}")

        for attempt in range(1, MAX_WRITTEN_ATTEMPTS + 1):
            if attempt == MAX_WRITTEN_ATTEMPTS:
                self.echo(f"Hint: {item.pinyin}")
            answer = self.prompt("Enter pinyin")

            if compare_pinyin(answer, item.pinyin):
                return _graded(attempt, self.echo)
            if attempt < 2:
                self.echo("Incorrect. Try again.", fg="red")
            record_confusion(item, Attribute.PINYIN, answer, pool)

        self._reveal(item, Attribute.PINYIN)
        return Outcome.INCORRECT

    def exercise_translation(self, item: Item, pool: Pool) -> Outcome:
        self.echo("\nTask: Enter translation keywords (e.g. 'have+not;context').")

        attempt = 0
        while attempt < MAX_TRANSLATION_ATTEMPTS:
            attempt += 1
            matches = find_items_by_keywords(self.prompt("Keywords"), pool)

            if not matches:
                self.echo("No words match the entered keywords.", fg="red")
                if attempt < MAX_TRANSLATION_ATTEMPTS:
                    self.echo("Try entering the keywords again.")
                    continue
                self._reveal(item, Attribute.TRANSLATION)
                return Outcome.INCORRECT

            self.echo("\nChoose the correct translation from the options below:")
            for i, match in enumerate(matches, start=1):
                context = f" (context: {match.context})" if match.context else ""
                self.echo(f"[{i}] {match.translation}{context}")

            try:
                choice = int(self.prompt("Number"))
            except ValueError:
                self.echo("Please enter a number from the list.", fg="yellow")
                attempt -= 1  # invalid input does not count
                continue

            if not 1 <= choice <= len(matches):
                self.echo("Invalid choice. Try again.", fg="yellow")
                attempt -= 1
                continue

            selected = matches[choice - 1]
            if selected.id == item.id:
                return _graded(attempt, self.echo)

            self.echo("Incorrect. Try again.", fg="red")
            record_confusion(item, Attribute.TRANSLATION, selected.id, pool)

        self._reveal(item, Attribute.TRANSLATION)
        return Outcome.INCORRECT

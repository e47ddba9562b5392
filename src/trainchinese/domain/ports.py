"""
Ports (interfaces) for the collaborators of the scheduling core.

These define the contract that infrastructure and interface adapters must
implement. Application services depend on these abstractions, not concrete
implementations.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from .models import Attribute, Item, Outcome, Pool


class Clock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        pass


class SystemClock(Clock):
    """Wall clock in naive local time, as written to snapshots."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Clock that only moves when told to. Used for tests and replays."""

    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> datetime:
        """Move forward by a ``timedelta(**kwargs)`` and return the new time."""
        self.current += timedelta(**kwargs)
        return self.current


class KnownItemsRepository(ABC):
    """
    Port for persisting the "known" partition.

    Implementations:
        - JsonKnownItemsRepository: pretty-printed JSON file.
    """

    @abstractmethod
    def load(self) -> dict[str, Item]:
        """
        Load every known item.

        Raises:
            SnapshotError: If the snapshot is malformed. Nothing is returned
                in that case; partial loads are never produced.
        """
        pass

    @abstractmethod
    def save(self, items: dict[str, Item]) -> None:
        pass


class Trainer(ABC):
    """
    Port for the interactive side of a training session.

    The trainer elicits answers from the learner and reports an Outcome
    per exercise. The core never reads input itself.
    """

    @abstractmethod
    def confirm_new_item(self) -> bool:
        """Resolve IntroduceDecision.ASK_CALLER (nothing is due)."""
        pass

    @abstractmethod
    def present(self, item: Item, attribute: Attribute) -> None:
        """Show the attribute a training chain starts from."""
        pass

    @abstractmethod
    def introduce(self, item: Item, pool: Pool) -> None:
        """Present a freshly promoted item (unscored)."""
        pass

    @abstractmethod
    def exercise_hanzi(self, item: Item, pool: Pool) -> Outcome:
        pass

    @abstractmethod
    def exercise_pinyin(self, item: Item, pool: Pool, audio_cue: bool = False) -> Outcome:
        pass

    @abstractmethod
    def exercise_translation(self, item: Item, pool: Pool) -> Outcome:
        pass

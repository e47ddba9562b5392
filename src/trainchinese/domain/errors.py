"""Exceptions raised by the scheduling core and its collaborators."""


class TrainChineseError(Exception):
    """Base class for all trainchinese errors."""


class InvalidOutcomeError(TrainChineseError, ValueError):
    """An attempt outcome outside {+1, 0, -1} was supplied."""


class MissingTaskError(TrainChineseError, KeyError):
    """An item lacks the TaskStats for a directed attribute pair."""


class ClockSkewError(TrainChineseError, ValueError):
    """The current time precedes the last-reviewed timestamp."""


class SnapshotError(TrainChineseError):
    """A persisted snapshot could not be loaded as a whole."""

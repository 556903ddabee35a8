from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from re import Pattern

MASKING_ERROR = "MASKING_ERROR"
DEFAULT_MASKING_CHARACTER = "X"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Interval:
    """Half-open character range ``[start, end)`` of a value."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


class MaskStatus(str, Enum):
    MASKED = "masked"
    PASSTHROUGH = "passthrough"
    ERROR = "error"


@dataclass(frozen=True)
class MaskResult:
    status: MaskStatus
    value: str | None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not MaskStatus.ERROR


@lru_cache(maxsize=256)
def compile_mask(pattern: str) -> Pattern[str]:
    # \w, \d and \s match ASCII characters only.
    return re.compile(pattern, re.ASCII)


def find_group_intervals(value: str, pattern: Pattern[str]) -> list[Interval] | None:
    """Return one interval per participating capture group of the first match.

    ``None`` means the pattern does not match anywhere in ``value``. Groups
    that do not take part in the match report ``(-1, -1)`` and are skipped.
    """
    match = pattern.search(value)
    if match is None:
        return None
    intervals: list[Interval] = []
    for group in range(1, pattern.groups + 1):
        start, end = match.span(group)
        if start < 0:
            continue
        intervals.append(Interval(start, end))
    return intervals


def merge_intervals(intervals: list[Interval]) -> list[Interval]:
    """Flatten nested and overlapping intervals into disjoint ascending runs."""
    if len(intervals) <= 1:
        return list(intervals)

    ordered = sorted(intervals, key=lambda interval: interval.start)
    start, end = ordered[0].start, ordered[0].end
    merged: list[Interval] = []
    for interval in ordered[1:]:
        if interval.start > end:
            merged.append(Interval(start, end))
            start, end = interval.start, interval.end
        else:
            end = max(end, interval.end)
    merged.append(Interval(start, end))
    return merged


def rewrite(value: str, intervals: list[Interval], masking_character: str) -> str:
    parts: list[str] = []
    cursor = 0
    for interval in intervals:
        if interval.start < cursor:
            raise ValueError(f"interval {interval} starts before offset {cursor}")
        parts.append(value[cursor : interval.start])
        parts.append(masking_character * interval.length)
        cursor = interval.end
    parts.append(value[cursor:])
    return "".join(parts)


@dataclass(frozen=True)
class Censor:
    """Masks the capture groups of a pattern with a single character.

    With ``^\\d{4}-(\\d{4})-(\\d{4})-\\d{4}$`` the value ``1234-5678-9012-3456``
    becomes ``1234-XXXX-XXXX-3456``. A group inside a repetition such as
    ``(\\d{4}-){3}`` only reports its last repetition, so only that part is
    masked.
    """

    masking_character: str = DEFAULT_MASKING_CHARACTER

    def __post_init__(self) -> None:
        if not isinstance(self.masking_character, str) or len(self.masking_character) != 1:
            raise ValueError(
                f"masking character must be a single character: {self.masking_character!r}"
            )

    def evaluate(self, value: str | None, pattern: str | None) -> MaskResult:
        if not value:
            return MaskResult(MaskStatus.PASSTHROUGH, value)
        if not pattern:
            return MaskResult(MaskStatus.PASSTHROUGH, value)

        try:
            compiled = compile_mask(pattern)
        except re.error as exc:
            logger.error("invalid mask pattern %r: %s", pattern, exc)
            return MaskResult(MaskStatus.ERROR, MASKING_ERROR, f"invalid pattern: {exc}")

        if compiled.groups == 0:
            logger.warning("mask pattern %r declares no capture groups", pattern)
            return MaskResult(MaskStatus.ERROR, MASKING_ERROR, "pattern has no capture groups")

        intervals = find_group_intervals(value, compiled)
        if intervals is None:
            logger.warning("mask pattern %r does not match the value", pattern)
            return MaskResult(MaskStatus.ERROR, MASKING_ERROR, "pattern does not match")
        if not intervals:
            logger.warning("no capture group of mask pattern %r took part in the match", pattern)
            return MaskResult(MaskStatus.ERROR, MASKING_ERROR, "no capture group matched")

        masked = rewrite(value, merge_intervals(intervals), self.masking_character)
        return MaskResult(MaskStatus.MASKED, masked)

    def process(self, value: str | None, pattern: str | None) -> str | None:
        return self.evaluate(value, pattern).value


def mask(
    value: str | None,
    pattern: str | None,
    masking_character: str = DEFAULT_MASKING_CHARACTER,
) -> str | None:
    return Censor(masking_character).process(value, pattern)

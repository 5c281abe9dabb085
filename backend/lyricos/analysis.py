"""
analysis.py
-----------
Per-variant syllable views built on count_line_syllables:
• resolve_line_syllables (…) – model-supplied count, else our own
• syllable_distribution (…)  – density bars for a variant's lyric lines
• suggestion_diff (…)        – "+2" / "-1" badge for a suggested line
• edit_line / edit_delta     – re-score a user-edited line against its original
"""

from __future__ import annotations

from typing import Iterable, Sequence

from lyricos.models import LyricLine, SuggestionScore, SyllableDistribution
from lyricos.syllables import count_line_syllables

LOCKED_WORD_CONFLICT = "locked_word_conflict"
MIN_BAR_HEIGHT = 10.0   # percent, keeps empty lines visible


def resolve_line_syllables(text: str, supplied=None) -> int:
    # a missing, zero or malformed count from the model means "not supplied"
    if isinstance(supplied, int) and not isinstance(supplied, bool) and supplied > 0:
        return supplied
    return count_line_syllables(text)


def lyric_lines(lines: Iterable[LyricLine]) -> list[LyricLine]:
    return [l for l in lines if l.type == "lyric"]


def average_syllables(lines: Iterable[LyricLine]) -> float:
    counts = [count_line_syllables(l.text) for l in lyric_lines(lines)]
    if not counts:
        return 0.0
    return round(sum(counts) / len(counts), 1)


def syllable_distribution(lines: Iterable[LyricLine]) -> SyllableDistribution:
    """
    Counts are always recomputed from the current text, so edited lines
    show their live value rather than the count the model reported.
    """
    counts = [count_line_syllables(l.text) for l in lyric_lines(lines)]
    peak = max(counts + [1])
    heights = [max(c * 100 / peak, MIN_BAR_HEIGHT) for c in counts]
    return SyllableDistribution(
        counts  = counts,
        heights = heights,
        total   = sum(counts),
        peak    = peak,
        average = round(sum(counts) / len(counts), 1) if counts else 0.0,
    )


def diff_label(diff: int) -> str:
    if diff == 0:
        return ""
    return f"+{diff}" if diff > 0 else str(diff)


def suggestion_diff(current: int, suggestion: str) -> SuggestionScore:
    count = count_line_syllables(suggestion)
    diff = count - current
    return SuggestionScore(text=suggestion, syllables=count, diff=diff, label=diff_label(diff))


def score_suggestions(current: int, suggestions: Iterable[str]) -> list[SuggestionScore]:
    return [suggestion_diff(current, s) for s in suggestions]


def edit_line(line: LyricLine, new_text: str) -> LyricLine:
    original = line.original_text if line.original_text is not None else line.text
    return line.model_copy(update={
        "text": new_text,
        "original_text": original,
        "is_edited": True,
        "syllables": count_line_syllables(new_text),
    })


def edit_delta(line: LyricLine) -> int:
    """New count minus original count; both measured here, never taken from the model."""
    if line.original_text is None:
        return 0
    return count_line_syllables(line.text) - count_line_syllables(line.original_text)


def has_conflict(line: LyricLine) -> bool:
    return LOCKED_WORD_CONFLICT in line.flags


def context_window(lines: Sequence[LyricLine], index: int, before: int = 2, after: int = 2) -> list[str]:
    lo = max(0, index - before)
    hi = min(len(lines), index + after + 1)
    return [l.text for l in lines[lo:hi]]

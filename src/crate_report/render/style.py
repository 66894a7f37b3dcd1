"""Severity classification and terminal styling."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import click


class Severity(Enum):
    """How alarming a number is; values double as HTML class names."""

    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"
    NEUTRAL = "neutral"


_COLORS = {
    Severity.SAFE: "green",
    Severity.WARNING: "yellow",
    Severity.DANGER: "red",
    Severity.NEUTRAL: "bright_black",
}


@dataclass(frozen=True)
class RenderConfig:
    """Options threaded through every renderer call."""

    color: bool = True


PLAIN = RenderConfig(color=False)


def paint(text: str, severity: Optional[Severity], config: RenderConfig) -> str:
    """Style text for the terminal, or return it untouched."""
    if severity is None or not config.color:
        return text
    return click.style(text, fg=_COLORS[severity])


def count_severity(count: int) -> Severity:
    """Zero is safe, single digits warn, ten or more is danger."""
    if count == 0:
        return Severity.SAFE
    if count < 10:
        return Severity.WARNING
    return Severity.DANGER


def ratio_severity(unsafe_count: int, total_count: int) -> Severity:
    """Neutral without functions, danger from 50% unsafe upwards."""
    if total_count == 0:
        return Severity.NEUTRAL
    if unsafe_count == 0:
        return Severity.SAFE
    if unsafe_count / total_count < 0.5:
        return Severity.WARNING
    return Severity.DANGER


def delta_severity(delta: int, decrease_is_good: bool = True) -> Severity:
    """Rising safety counters are danger, falling ones safe."""
    if delta == 0 or not decrease_is_good:
        return Severity.NEUTRAL
    return Severity.DANGER if delta > 0 else Severity.SAFE


def percentage(unsafe_count: int, total_count: int) -> float:
    if total_count == 0:
        return 0.0
    return unsafe_count / total_count * 100.0


def signed(delta: int) -> str:
    """``+3``, ``-2`` or ``0``."""
    return f"+{delta}" if delta > 0 else str(delta)

"""Candidate data structures for the refactoring heuristics."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Candidate:
    """A function flagged by one of the heuristics."""

    fn_name: str
    line_number: int  # Line of the fn item (1-indexed)

    def __str__(self) -> str:
        return f"{self.fn_name}:{self.line_number}"


@dataclass
class FileStats:
    """Candidates found in a single file."""

    filename: str
    candidates: List[Candidate] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.candidates)

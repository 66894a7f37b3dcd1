"""Fixed-width Markdown tables with optionally styled cells."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .style import RenderConfig, Severity, paint


@dataclass(frozen=True)
class Cell:
    text: str
    severity: Optional[Severity] = None


@dataclass
class Table:
    """First column left aligned, the rest right aligned.

    Widths are measured on the unstyled text so escape codes never skew
    alignment.
    """

    headers: List[Cell]
    rows: List[List[Cell]] = field(default_factory=list)

    def add_row(self, row: Sequence[Cell]) -> None:
        if len(row) != len(self.headers):
            raise ValueError(f"expected {len(self.headers)} cells, got {len(row)}")
        self.rows.append(list(row))

    def _widths(self) -> List[int]:
        widths = [0] * len(self.headers)
        for row in [self.headers] + self.rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(cell.text))
        return widths

    @staticmethod
    def _line(cells: Sequence[str]) -> str:
        first, *rest = cells
        return f"| {first} | " + "".join(f" {cell} |" for cell in rest)

    def to_markdown(self, config: RenderConfig) -> str:
        widths = self._widths()

        def render(row: List[Cell]) -> str:
            first, *rest = zip(row, widths)
            cells = [paint(first[0].text.ljust(first[1]), first[0].severity, config)]
            cells += [paint(c.text.rjust(w), c.severity, config) for c, w in rest]
            return self._line(cells)

        separator = [":".ljust(widths[0], "-")] + [":".rjust(w, "-") for w in widths[1:]]
        lines = [render(self.headers), self._line(separator)]
        lines += [render(row) for row in self.rows]
        return "\n".join(lines) + "\n"

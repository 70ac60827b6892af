"""Side-by-side terminal surface for one-shot tree/source output."""

from __future__ import annotations

import sys
from itertools import zip_longest
from typing import TextIO

from .ansi import clip_ansi_line, fit_ansi_line

DIVIDER = " │ "


class StdoutSurface:
    """Write the tree pane on the left and the source pane on the right.

    With ``stacked`` the panes are printed one after another instead.
    """

    def __init__(
        self,
        max_cols: int,
        *,
        stream: TextIO | None = None,
        stacked: bool = False,
        no_color: bool = False,
    ) -> None:
        self.max_cols = max(1, max_cols)
        self.stream = stream if stream is not None else sys.stdout
        self.stacked = stacked
        self.reset = "" if no_color else "\033[0m"

    def _left_width(self) -> int:
        return max(1, (self.max_cols - len(DIVIDER)) // 2)

    def draw(self, tree_rows: list[str], source_rows: list[str]) -> None:
        out: list[str] = []
        if self.stacked:
            for row in [*tree_rows, "", *source_rows]:
                out.append(clip_ansi_line(row, self.max_cols) + self.reset + "\n")
        else:
            left_width = self._left_width()
            right_width = max(1, self.max_cols - left_width - len(DIVIDER))
            for left, right in zip_longest(tree_rows, source_rows, fillvalue=""):
                left_text = fit_ansi_line(left, left_width, self.reset)
                right_text = clip_ansi_line(right, right_width)
                out.append(f"{left_text}{DIVIDER}{right_text}{self.reset}\n")
        self.stream.write("".join(out))
        self.stream.flush()

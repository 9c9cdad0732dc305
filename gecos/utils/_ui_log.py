"""Log style user interface"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Any, TextIO

from gecos.utils import ui


class LogUI(ui.UI):
    def __init__(self, level: int, stream: None | TextIO = None) -> None:
        self.level: int = level
        self.stream = stream

    def get_leading(self, level: None | ui.LEVEL_LITERAL) -> str:
        ret = f"[{datetime.now().isoformat()}]"
        if level is not None:
            ret += f" [{ui.LEVEL_STRING[level]:^7}]"
        return ret

    def print(self, *values: str | Any, level: None | ui.LEVEL_LITERAL = None) -> None:
        stream = self.stream if self.stream is not None else sys.stderr
        print(self.get_leading(level), *values, file=stream)

    def message(self, level: ui.LEVEL_LITERAL, *values: str | Any) -> None:
        if level >= self.level:
            self.print(*values, level=level)

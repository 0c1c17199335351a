"""
Output sinks for rendered report lines.

A sink receives one line of text at a time plus an optional style token.
Styling stays local to each write, nothing touches shared terminal state.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, TextIO, Tuple


class StyleToken(Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    GRAY = "gray"
    BOLD = "bold"


ANSI_CODES = {
    StyleToken.GREEN: "\033[32m",
    StyleToken.YELLOW: "\033[33m",
    StyleToken.RED: "\033[31m",
    StyleToken.GRAY: "\033[90m",
    StyleToken.BOLD: "\033[1m",
}
ANSI_RESET = "\033[0m"


class OutputSink(ABC):

    @abstractmethod
    def write(self, text: str, style: Optional[StyleToken] = None) -> None:
        """Write one line"""
        pass


class StreamSink(OutputSink):
    """Writes lines to a text stream, wrapping styled lines in ANSI codes"""

    def __init__(self, stream: Optional[TextIO] = None, use_color: bool = True):
        self.stream = stream if stream is not None else sys.stdout
        self.use_color = use_color

    def write(self, text: str, style: Optional[StyleToken] = None) -> None:
        if self.use_color and style is not None:
            text = f"{ANSI_CODES[style]}{text}{ANSI_RESET}"
        self.stream.write(text + "\n")


class RecordingSink(OutputSink):
    """Keeps (text, style) pairs in memory"""

    def __init__(self):
        self.lines: List[Tuple[str, Optional[StyleToken]]] = []

    def write(self, text: str, style: Optional[StyleToken] = None) -> None:
        self.lines.append((text, style))

    @property
    def text(self) -> str:
        return "\n".join(text for text, _ in self.lines)

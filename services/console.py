"""
Console Front End Adapters

Terminal implementations of the Notifier, Clipboard and UrlOpener protocols,
used by the command-line interface.
"""

import sys
import webbrowser
from typing import Callable, TextIO

from utils.exceptions import ShareError


class ConsoleNotifier:
    """Blocking alerts and confirmations on the terminal."""

    def __init__(self, stream: TextIO = None, ask: Callable[[str], str] = input,
                 assume_yes: bool = False):
        self.stream = stream or sys.stderr
        self.ask = ask
        self.assume_yes = assume_yes

    def alert(self, message: str) -> None:
        print(f"! {message}", file=self.stream)

    def confirm(self, message: str) -> bool:
        if self.assume_yes:
            return True
        try:
            answer = self.ask(f"{message} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")


class TerminalClipboard:
    """Prints the text so it can be copied from the terminal."""

    def __init__(self, stream: TextIO = None):
        self.stream = stream or sys.stdout

    def copy(self, text: str) -> None:
        print(text, file=self.stream)


class BrowserOpener:
    """Opens share targets in the default web browser."""

    def open(self, url: str, new_window: bool = True) -> None:
        opened = webbrowser.open(url, new=1 if new_window else 0)
        if not opened:
            raise ShareError(f"No browser available to open {url}")

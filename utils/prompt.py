"""
Yes/No prompts that fall back to a default when the operator does not answer
in time (or stdin is closed).

One daemon thread per input stream reads lines into a shared queue. Lines
that arrive after their prompt already timed out are discarded before the
next question is asked, so a late answer can never be taken for the next one.
"""

from __future__ import annotations

import queue
import sys
import threading
import time
from typing import IO, Optional

from rich.console import Console

console = Console()

YES = ("y", "yes")
NO = ("n", "no")


class LineReader:
    """Long-lived reader feeding every line of `stream` into `lines`; None marks EOF."""

    def __init__(self, stream: IO[str]):
        self.stream = stream
        self.lines: "queue.Queue[Optional[str]]" = queue.Queue()
        self.closed = False
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self):
        for line in iter(self.stream.readline, ""):
            self.lines.put(line)
        self.lines.put(None)

    def discard_pending(self):
        while True:
            try:
                line = self.lines.get_nowait()
            except queue.Empty:
                return
            if line is None:
                self.closed = True

    def next_line(self, timeout: float) -> Optional[str]:
        """Return the next line, None on EOF; raises queue.Empty on timeout."""
        if self.closed:
            return None
        line = self.lines.get(timeout=timeout)
        if line is None:
            self.closed = True
        return line


_readers: dict = {}
_readers_lock = threading.Lock()


def reader_for(stream: IO[str]) -> LineReader:
    with _readers_lock:
        reader = _readers.get(stream)
        if reader is None:
            reader = _readers[stream] = LineReader(stream)
        return reader


def ask_yes_no(
    question: str,
    default: bool,
    timeout: float,
    stream: Optional[IO[str]] = None,
) -> bool:
    """Ask a Y/N question and return the answer, or `default` after `timeout` seconds."""
    reader = reader_for(stream if stream is not None else sys.stdin)
    reader.discard_pending()

    choice = "[cyan](Y/n)[/cyan]" if default else "[cyan](y/N)[/cyan]"
    console.print(f"{question} {choice} [dim]({int(timeout)}s)[/dim]: ", end="")

    deadline = time.monotonic() + timeout
    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        try:
            line = reader.next_line(remaining)
        except queue.Empty:
            break
        if line is None:
            console.print()
            return default

        answer = line.strip().lower()
        if not answer:
            return default
        if answer in YES:
            return True
        if answer in NO:
            return False
        console.print("[prompt.invalid]Please enter Y or N[/prompt.invalid]: ", end="")

    label = "yes" if default else "no"
    console.print(f"\n[dim]⏱️  No answer after {int(timeout)}s, using default: {label}[/dim]")
    return default

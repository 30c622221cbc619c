"""Test helpers: an in-memory UCI engine driven by scripted searches."""

from __future__ import annotations

import queue
from pathlib import Path
from typing import List, Optional

from evaluator.errors import EngineIOError

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
AFTER_E4_FEN = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"

FAKE_ENGINE_SCRIPT = Path(__file__).with_name("fake_engine.py")

EOF_MARKER = None


def info(rank: int, cp: int, *moves: str, depth: int = 10) -> str:
    return f"info depth {depth} seldepth 14 multipv {rank} score cp {cp} nodes 1200 nps 600000 pv {' '.join(moves)}"


class FakeEngineSession:
    """Replies to each 'go' with the next scripted list of output lines.

    `None` inside a script ends the output stream at that point.
    """

    def __init__(
        self,
        searches: List[List[Optional[str]]],
        events: Optional[list] = None,
        fail_on_go: Optional[int] = None,
    ) -> None:
        self.searches = list(searches)
        self.events = events if events is not None else []
        self.commands: List[str] = []
        self.flushes: List[str] = []
        self.fail_on_go = fail_on_go
        self.terminated = False
        self.waited = False
        self._lines: queue.Queue = queue.Queue()
        self._go_count = 0

    def send_command(self, command: str, flush: bool = True) -> None:
        if command.startswith("go"):
            if self.fail_on_go == self._go_count:
                raise EngineIOError("Broken pipe")
        self.commands.append(command)
        self.events.append(("command", command))
        if flush:
            self.flushes.append(command)

        if command == "uci":
            self._lines.put("id name FakeFish")
            self._lines.put("id author tests")
            self._lines.put("uciok")
        elif command.startswith("go"):
            script = self.searches[self._go_count]
            self._go_count += 1
            for line in script:
                self._lines.put(line)
        elif command == "quit":
            self._lines.put(EOF_MARKER)

    def read_line(self) -> Optional[str]:
        line = self._lines.get()
        if line is None:
            self._lines.put(None)
        return line

    def terminate(self) -> None:
        self.terminated = True
        self._lines.put(None)

    def wait(self, timeout: Optional[float] = None) -> Optional[int]:
        self.waited = True
        return 0

    @property
    def go_commands(self) -> List[str]:
        return [c for c in self.commands if c.startswith("go")]



"""
UCI Engine Session
Subprocess wrapper exposing a command stream and a blocking line stream
"""

import logging
import queue
import subprocess
import threading
from pathlib import Path
from typing import List, Optional, Protocol, Union

from .errors import EngineIOError

logger = logging.getLogger(__name__)

STARTPOS = "startpos"


def uci_command() -> str:
    return "uci"


def setoption_command(name: str, value) -> str:
    return f"setoption name {name} value {value}"


def position_command(notation: str) -> str:
    """Set a position with no move history"""
    if notation == STARTPOS:
        return "position startpos"
    return f"position fen {notation}"


def go_command(depth: int) -> str:
    return f"go depth {depth}"


def quit_command() -> str:
    return "quit"


class EngineSession(Protocol):
    """What the driver needs from a running engine"""

    def send_command(self, command: str, flush: bool = True) -> None:
        ...

    def read_line(self) -> Optional[str]:
        ...

    def terminate(self) -> None:
        ...

    def wait(self, timeout: Optional[float] = None) -> Optional[int]:
        ...


class EngineProcess:
    """
    UCI engine subprocess

    Features:
    - Background reader thread feeding a line queue
    - Blocking reads without polling
    - End-of-output sentinel so readers never hang on a dead engine
    """

    def __init__(self, command: Union[str, Path, List[str]]):
        """
        Initialize engine process wrapper

        Args:
            command: Path to the engine executable, or a full argv list
        """
        if isinstance(command, (str, Path)):
            self.command = [str(command)]
        else:
            self.command = [str(part) for part in command]

        self.process: Optional[subprocess.Popen] = None
        self.output_queue: queue.Queue = queue.Queue()
        self.reader_thread: Optional[threading.Thread] = None
        self.read_error: Optional[Exception] = None
        self._write_lock = threading.Lock()

    def start(self) -> "EngineProcess":
        """
        Start the engine process

        Raises:
            EngineIOError: if the process cannot be spawned
        """
        try:
            self.process = subprocess.Popen(
                self.command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                text=True,
                bufsize=1,
            )
        except OSError as e:
            raise EngineIOError(f"Failed to start engine {self.command[0]}: {e}") from e

        self.reader_thread = threading.Thread(
            target=self._read_output,
            name="engine-reader",
            daemon=True,
        )
        self.reader_thread.start()

        logger.info(f"Engine process started: PID {self.process.pid}")
        return self

    def _read_output(self):
        """Background thread to read engine output"""
        try:
            for line in self.process.stdout:
                self.output_queue.put(line.rstrip("\r\n"))
        except (OSError, ValueError) as e:
            logger.error(f"Error reading engine output: {e}")
            self.read_error = e
        finally:
            self.output_queue.put(None)

    def send_command(self, command: str, flush: bool = True):
        """
        Send command to engine

        Raises:
            EngineIOError: if the pipe is closed or the write fails
        """
        if not self.process or not self.process.stdin:
            raise EngineIOError("Engine not started")

        logger.debug(f">> {command}")
        try:
            with self._write_lock:
                self.process.stdin.write(command + "\n")
                if flush:
                    self.process.stdin.flush()
        except (OSError, ValueError) as e:
            raise EngineIOError(f"Error sending command '{command}': {e}") from e

    def read_line(self) -> Optional[str]:
        """
        Block until the engine produces a line

        Returns:
            The line without its terminator, or None once output has ended

        Raises:
            EngineIOError: if output ended because the pipe could not be read
        """
        if not self.reader_thread:
            raise EngineIOError("Engine not started")

        line = self.output_queue.get()
        if line is None:
            # keep the sentinel for any later reader
            self.output_queue.put(None)
            if self.read_error is not None:
                raise EngineIOError(
                    f"Error reading engine output: {self.read_error}"
                ) from self.read_error
            return None

        return line

    def terminate(self):
        """Kill the engine if it is still running"""
        if self.process and self.process.poll() is None:
            self.process.kill()
            logger.warning("Engine killed forcefully")

    def wait(self, timeout: Optional[float] = None) -> Optional[int]:
        """Wait for the engine to exit and return its exit code"""
        if not self.process:
            return None

        returncode = self.process.wait(timeout=timeout)
        if self.process.stdin:
            try:
                self.process.stdin.close()
            except (OSError, ValueError) as e:
                logger.debug(f"Engine stdin already closed: {e}")
        logger.info(f"Engine exited with code {returncode}")
        return returncode

    def __enter__(self):
        """Context manager entry"""
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.terminate()
        if self.process:
            self.process.wait()

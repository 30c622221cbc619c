"""
Command Writer
Sends the setup handshake and one search per position, paced by the driver
"""

import logging
import threading
from typing import List, Optional

from .channel import ChannelClosed, SearchChannel
from .config import EvaluatorConfig
from .uci_interface import (
    EngineSession,
    go_command,
    position_command,
    quit_command,
    setoption_command,
    uci_command,
)

logger = logging.getLogger(__name__)


class CommandWriter:
    """
    Background writer for a batch of positions

    Never has more than one search outstanding: after each 'go' it blocks on
    the channel until the driver acknowledges that position.
    """

    def __init__(self,
                 session: EngineSession,
                 positions: List[str],
                 channel: SearchChannel,
                 config: Optional[EvaluatorConfig] = None):
        self.session = session
        self.positions = list(positions)
        self.channel = channel
        self.config = config or EvaluatorConfig()
        self.thread: Optional[threading.Thread] = None

    def setup_commands(self) -> List[str]:
        """Handshake and option commands sent once before any position"""
        return [
            uci_command(),
            setoption_command("Threads", self.config.threads),
            setoption_command("Hash", self.config.hash_mb),
            setoption_command("MultiPV", self.config.multipv),
        ]

    def run(self):
        """Send every command for the batch; failures go to the channel"""
        try:
            self._send_all()
        except ChannelClosed as e:
            logger.info(f"Command writer stopped: {e}")
        except Exception as e:
            logger.error(f"Command writer failed: {e}")
            self.channel.fail(e)
            # unblock the driver's pending read
            self.session.terminate()

    def _send_all(self):
        for command in self.setup_commands():
            self.session.send_command(command, flush=False)

        for index, notation in enumerate(self.positions):
            self.session.send_command(position_command(notation), flush=False)
            self.session.send_command(go_command(self.config.depth), flush=True)
            self.channel.search_issued(index)
            logger.debug(f"Search issued for position {index}")

            self.channel.wait_for_ack(index)

        self.session.send_command(quit_command(), flush=True)
        logger.info(f"All {len(self.positions)} positions sent, quit issued")

    def start(self) -> "CommandWriter":
        self.thread = threading.Thread(target=self.run, name="command-writer", daemon=True)
        self.thread.start()
        return self

    def join(self, timeout: Optional[float] = None):
        if self.thread:
            self.thread.join(timeout)

"""
Client for the remote score generator.

Protocol: send the skill as one byte, receive the score as two bytes
(big-endian unsigned). There is no other framing; a reply shorter than two
bytes means the connection is broken.
"""

import socket
from typing import Callable, Optional

from elosim.exceptions import ConfigurationError, ProtocolError
from elosim.outcomes.base import OutcomeSource


DEFAULT_HOST = "localhost"
DEFAULT_PORT = 13337
REPLY_SIZE = 2


def encode_request(skill: int) -> bytes:
    """Encode a skill value as the one-byte request."""
    if not 0 <= skill <= 255:
        raise ConfigurationError(f"Skill {skill} does not fit the one-byte request (0-255)")
    return bytes([skill])


def decode_reply(reply: bytes) -> int:
    """Decode the two-byte big-endian score."""
    if len(reply) != REPLY_SIZE:
        raise ProtocolError(f"Expected {REPLY_SIZE} reply bytes, got {len(reply)}")
    return reply[0] << 8 | reply[1]


class ScoreClient:
    """
    Synchronous connection to the score generator.

    Usage:
        with ScoreClient() as client:
            score = client.play_single_game(30)
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: Optional[float] = None
    ):
        """
        Connect to the generator. Returns once the connection is established.

        Args:
            host: Generator host (default: localhost)
            port: Generator port (default: 13337)
            timeout: Optional socket timeout in seconds (default: block forever)

        Raises:
            ProtocolError: If the connection cannot be established
        """
        self.host = host
        self.port = port
        try:
            self._sock = socket.create_connection((host, port), timeout=timeout)
        except OSError as e:
            raise ProtocolError(f"Cannot connect to score generator at {host}:{port}: {e}") from e

    def play_single_game(self, skill: int) -> int:
        """
        Play one game at the given skill and return its score.

        Raises:
            ConfigurationError: If skill is outside 0-255
            ProtocolError: If the connection drops or the reply is short
        """
        request = encode_request(skill)
        try:
            self._sock.sendall(request)
            reply = self._recv_exactly(REPLY_SIZE)
        except OSError as e:
            raise ProtocolError(f"Score request for skill {skill} failed: {e}") from e
        return decode_reply(reply)

    def _recv_exactly(self, size: int) -> bytes:
        buf = b""
        while len(buf) < size:
            chunk = self._sock.recv(size - len(buf))
            if not chunk:
                raise ProtocolError(
                    f"Connection closed after {len(buf)} of {size} reply bytes"
                )
            buf += chunk
        return buf

    def close(self):
        self._sock.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class RemoteSampleOutcome(OutcomeSource):
    """
    Play one live game per side on the remote generator and compare scores.

    A wins only with a strictly higher score; ties count as a loss for A.
    """

    def __init__(self, client: ScoreClient, skill_to_request: Optional[Callable[[int], int]] = None):
        """
        Args:
            client: Connected ScoreClient
            skill_to_request: Optional mapping from skill to the byte sent
                (default: send the skill unchanged)
        """
        self.client = client
        self.skill_to_request = skill_to_request

    def _request(self, skill: int) -> int:
        if self.skill_to_request is None:
            return skill
        return self.skill_to_request(skill)

    def decide(self, skill_a: int, skill_b: int) -> bool:
        score_a = self.client.play_single_game(self._request(skill_a))
        score_b = self.client.play_single_game(self._request(skill_b))
        return score_a > score_b

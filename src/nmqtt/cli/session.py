"""Interactive line-oriented session: read input, send datagrams, show replies."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, TextIO

from ..exceptions import NmqttError, ParseError
from ..framing.frame import Frame
from ..framing.msgid import MessageIdAllocator
from ..transport.driver import Transport
from ..utils.escapes import parse_hex, parse_text_with_escapes
from .commands import parse_command
from .display import DisplayMode, format_datagram

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  <input>            Send input using the current mode
  text <message>     Send text (\\n, \\t, \\xHH escapes)
  hex <bytes>        Send hex (e.g., hex deadbeef)
  mqtt <command>     Send a protocol command (e.g., mqtt pub a/b hello qos=1)
  file <path>        Send file contents
  mode <name>        Switch mode: auto, text, hex, mqtt
  help               Show this help
  quit               Exit
"""


def encode_input(text: str, mode: DisplayMode, msg_ids: MessageIdAllocator) -> bytes:
    """Turn one line of user input into datagram bytes.

    MQTT parses a protocol command and frames it with the next message id.
    AUTO tries a command first, then hex, then falls back to text.

    Raises:
        ParseError: If the input does not fit the mode
        PayloadTooLargeError: If a command produces a frame over 255 bytes
    """
    if mode is DisplayMode.TEXT:
        return parse_text_with_escapes(text)
    if mode is DisplayMode.HEX:
        return parse_hex(text)
    if mode is DisplayMode.MQTT:
        return _encode_command(text, msg_ids)

    try:
        return _encode_command(text, msg_ids)
    except ParseError:
        pass
    try:
        return parse_hex(text)
    except ParseError:
        return parse_text_with_escapes(text)


def _encode_command(text: str, msg_ids: MessageIdAllocator) -> bytes:
    packet = parse_command(text)
    return Frame(msg_id=msg_ids.allocate(), packet=packet).encode()


class InteractiveSession:
    """Reads lines, sends them through a transport and prints the traffic.

    Attributes:
        transport: Open transport to send through
        mode: Current input/display mode
    """

    def __init__(
        self,
        transport: Transport,
        mode: DisplayMode = DisplayMode.AUTO,
        out: Optional[TextIO] = None,
    ) -> None:
        self.transport = transport
        self.mode = mode
        self._out = out
        transport.attach_rx_callback(self.on_receive)

    def _print(self, text: str) -> None:
        print(text, file=self._out, flush=True)

    def on_receive(self, data: bytes, source: str) -> None:
        self._print(f"← {len(data)} bytes: {format_datagram(data, self.mode)}")

    def handle_line(self, line: str) -> bool:
        """Process one input line.

        Returns:
            False when the session should end, True otherwise
        """
        line = line.strip()
        if not line:
            return True

        command, _, arg = line.partition(" ")
        command = command.lower()

        if command in ("quit", "exit"):
            return False
        if command == "help":
            self._print(HELP_TEXT)
            return True
        if command == "mode":
            self._switch_mode(arg.strip())
            return True

        try:
            if command == "file":
                self._send(Path(arg.strip()).read_bytes(), "FILE")
            elif command in ("text", "hex", "mqtt"):
                mode = DisplayMode(command)
                self._send(encode_input(arg, mode, self.transport.msg_ids), mode.name)
            else:
                self._send(encode_input(line, self.mode, self.transport.msg_ids), self.mode.name)
        except (NmqttError, OSError) as err:
            logger.debug("Input %r rejected", line, exc_info=True)
            self._print(f"error: {err}")
        return True

    def _switch_mode(self, name: str) -> None:
        try:
            self.mode = DisplayMode(name.lower())
        except ValueError:
            self._print(f"error: unknown mode: {name}")
            return
        self._print(f"mode: {self.mode.value}")

    def _send(self, data: bytes, label: str) -> None:
        sent = self.transport.send(data)
        self._print(f"→ [{label}] {sent} bytes: {format_datagram(data, self.mode)}")

    def run(self, stream: TextIO) -> None:
        """Process lines from stream until EOF or quit."""
        for line in stream:
            if not self.handle_line(line):
                break

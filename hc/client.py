# hc/client.py

import asyncio
import contextlib
import logging

from hc.connection import read_with_deadline, write_frame
from hc.exceptions import TransportError
from hc.framing import encode_disconnect, encode_frame
from hc.huffman_codec import compress, decompress

logger = logging.getLogger(__name__)


class HuffmanClient:
    """One persistent connection to a Huffman server, one request in flight at a time."""

    def __init__(self, reader, writer, read_timeout=None):
        self.reader = reader
        self.writer = writer
        self.read_timeout = read_timeout
        self.closed = False

    @classmethod
    async def connect(cls, host, port, read_timeout=None):
        try:
            reader, writer = await asyncio.open_connection(host, port)
        except OSError as exc:
            raise TransportError(f"cannot connect to {host}:{port}: {exc}") from exc
        logger.info("Connected to %s:%s", host, port)
        return cls(reader, writer, read_timeout)

    async def send(self, text):
        """Send ``text`` and return the decoded reply."""
        await write_frame(self.writer, encode_frame(compress(text)))
        payload = await read_with_deadline(self.reader, self.read_timeout)
        if payload is None:
            raise TransportError("server sent a disconnect frame instead of a reply")
        return decompress(*payload)

    async def disconnect(self):
        """Send the disconnect frame, then close."""
        try:
            await write_frame(self.writer, encode_disconnect())
        finally:
            await self.close()

    async def close(self):
        if self.closed:
            return
        self.closed = True
        self.writer.close()
        with contextlib.suppress(ConnectionError):
            await self.writer.wait_closed()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

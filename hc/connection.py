# hc/connection.py

import asyncio
import contextlib
import logging

from hc.exceptions import CodecError, TransportError
from hc.framing import encode_frame, read_frame
from hc.huffman_codec import compress, decompress

logger = logging.getLogger(__name__)


def reply_for(message):
    return f"Received: {message}"


async def read_with_deadline(reader, read_timeout=None):
    """read_frame() with an optional deadline in seconds (0 or None waits forever)."""
    if not read_timeout:
        return await read_frame(reader)
    try:
        return await asyncio.wait_for(read_frame(reader), read_timeout)
    except asyncio.TimeoutError as exc:
        raise TransportError(f"no complete frame within {read_timeout}s") from exc


async def write_frame(writer, frame):
    try:
        writer.write(frame)
        await writer.drain()
    except OSError as exc:
        raise TransportError(str(exc) or exc.__class__.__name__) from exc


async def handle_connection(reader, writer, read_timeout=None):
    """Serve one client: decode each frame, answer with "Received: <text>".

    Returns when the client sends the disconnect frame. Codec and transport
    failures end this connection only. The writer is closed exactly once.
    """
    peer = writer.get_extra_info("peername")
    logger.info("Client connected: %s", peer)
    try:
        while True:
            payload = await read_with_deadline(reader, read_timeout)
            if payload is None:
                logger.info("Client %s requested disconnect", peer)
                break

            message = decompress(*payload)
            logger.info("Client [%s]: %s", peer, message)

            await write_frame(writer, encode_frame(compress(reply_for(message))))
    except CodecError as exc:
        logger.warning("Rejected frame from %s: %s: %s", peer, exc.__class__.__name__, exc)
    except TransportError as exc:
        logger.warning("Connection to %s failed: %s", peer, exc)
    finally:
        writer.close()
        with contextlib.suppress(ConnectionError):
            await writer.wait_closed()
        logger.info("Connection closed: %s", peer)


async def start_server(host, port, read_timeout=None):
    async def on_connect(reader, writer):
        await handle_connection(reader, writer, read_timeout)

    return await asyncio.start_server(on_connect, host, port)


async def serve(server):
    """Run an already bound server until cancelled."""
    addresses = ", ".join(str(sock.getsockname()) for sock in server.sockets)
    logger.info("Huffman server listening on %s", addresses)
    async with server:
        await server.serve_forever()

import logging

from channels.generic.websocket import AsyncWebsocketConsumer

from hc.connection import reply_for
from hc.exceptions import CodecError, TransportError
from hc.framing import decode_frame, encode_frame
from hc.huffman_codec import compress, decompress

logger = logging.getLogger(__name__)

# Close code for protocol violations (text message, bad frame).
BAD_FRAME = 4000


class HuffmanConsumer(AsyncWebsocketConsumer):
    """Same exchange as the TCP handler, one frame per binary WebSocket message."""

    async def connect(self):
        self.peer = self.scope.get("client")
        await self.accept()
        logger.info("WebSocket client connected: %s", self.peer)

    async def disconnect(self, close_code):
        logger.info("WebSocket connection closed: %s (code %s)", self.peer, close_code)

    # ---------------------- Message Handling ----------------------

    async def receive(self, text_data=None, bytes_data=None):
        if bytes_data is None:
            logger.warning("Text message from %s, expected a binary frame", self.peer)
            await self.close(code=BAD_FRAME)
            return

        try:
            payload = await decode_frame(bytes_data)
        except (CodecError, TransportError) as exc:
            logger.warning("Rejected frame from %s: %s: %s", self.peer, exc.__class__.__name__, exc)
            await self.close(code=BAD_FRAME)
            return

        if payload is None:
            logger.info("WebSocket client %s requested disconnect", self.peer)
            await self.close()
            return

        try:
            message = decompress(*payload)
        except CodecError as exc:
            logger.warning("Rejected frame from %s: %s: %s", self.peer, exc.__class__.__name__, exc)
            await self.close(code=BAD_FRAME)
            return

        logger.info("WebSocket client [%s]: %s", self.peer, message)
        await self.send(bytes_data=encode_frame(compress(reply_for(message))))

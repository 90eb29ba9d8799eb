import asyncio

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from hc.client import HuffmanClient
from hc.exceptions import HuffmanError

QUIT_COMMAND = "/quit"


class Command(BaseCommand):
    help = "Interactive client: each line typed is compressed, sent, and the reply printed. Type /quit to exit."

    def add_arguments(self, parser):
        parser.add_argument("--host", default=settings.HUFFMAN_CLIENT_HOST)
        parser.add_argument("--port", type=int, default=settings.HUFFMAN_PORT)
        parser.add_argument("--read-timeout", type=float, default=settings.HUFFMAN_READ_TIMEOUT)

    def handle(self, *args, **options):
        try:
            asyncio.run(self.chat(options["host"], options["port"], options["read_timeout"]))
        except HuffmanError as exc:
            raise CommandError(str(exc)) from exc
        finally:
            self.stdout.write("Disconnected.")

    async def read_line(self):
        try:
            return await asyncio.to_thread(input, "You: ")
        except EOFError:
            return None

    async def chat(self, host, port, read_timeout):
        client = await HuffmanClient.connect(host, port, read_timeout)
        self.stdout.write(f"Connected to server {host}:{port}")
        async with client:
            while True:
                line = await self.read_line()
                if line is None or line.lower() == QUIT_COMMAND:
                    await client.disconnect()
                    break

                reply = await client.send(line)
                self.stdout.write(f"Server: {reply}")

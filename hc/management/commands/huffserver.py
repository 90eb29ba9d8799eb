import asyncio

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from hc.connection import serve, start_server


class Command(BaseCommand):
    help = "Accept Huffman-framed messages over TCP and answer each with \"Received: <text>\"."

    def add_arguments(self, parser):
        parser.add_argument("--host", default=settings.HUFFMAN_HOST)
        parser.add_argument("--port", type=int, default=settings.HUFFMAN_PORT)
        parser.add_argument(
            "--read-timeout",
            type=float,
            default=settings.HUFFMAN_READ_TIMEOUT,
            help="Seconds to wait for a complete frame (0 waits forever).",
        )

    def handle(self, *args, **options):
        try:
            asyncio.run(self.run(options["host"], options["port"], options["read_timeout"]))
        except KeyboardInterrupt:
            self.stdout.write("Server stopped.")

    async def run(self, host, port, read_timeout):
        try:
            server = await start_server(host, port, read_timeout)
        except OSError as exc:
            raise CommandError(f"cannot listen on {host}:{port}: {exc}") from exc
        self.stdout.write(f"HuffmanServer listening on port {port}")
        await serve(server)

from __future__ import annotations

import signal

import structlog
from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import connection, connections

from modules.core.rpc.dispatcher import MessageDispatcher
from modules.core.rpc.server import RpcServer

logger = structlog.get_logger(__name__)


def _raise_keyboard_interrupt(signum, frame):
    raise KeyboardInterrupt


class Command(BaseCommand):
    help = "Start the products RPC server (TCP, length-prefixed JSON)."

    def add_arguments(self, parser):
        parser.add_argument("--host", default=None, help="Bind address (default: HOST).")
        parser.add_argument(
            "--port", type=int, default=None, help="TCP port (default: PORT)."
        )

    def handle(self, *args, **options):
        host = options["host"] or settings.HOST
        port = settings.PORT if options["port"] is None else options["port"]

        connection.ensure_connection()
        logger.info("database_connected", vendor=connection.vendor)

        dispatcher = MessageDispatcher.from_settings()
        server = RpcServer((host, port), dispatcher=dispatcher)
        signal.signal(signal.SIGTERM, _raise_keyboard_interrupt)

        logger.info(
            f"Products Microservice running on port {server.port}",
            host=host,
            port=server.port,
            commands=dispatcher.commands,
        )
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("rpc.server_stopping")
        finally:
            server.server_close()
            connections.close_all()
            logger.info("database_disconnected")

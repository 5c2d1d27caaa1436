"""Tests for the runrpcserver and seed_data management commands."""

from __future__ import annotations

from io import StringIO
from unittest.mock import MagicMock

import pytest
from django.core.management import call_command

from modules.core.rpc.server import RpcServer
from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestRunRpcServer:
    @pytest.fixture()
    def patched(self, monkeypatch):
        connections = MagicMock()
        monkeypatch.setattr(
            "modules.core.management.commands.runrpcserver.connections", connections
        )
        monkeypatch.setattr(
            "modules.core.management.commands.runrpcserver.signal.signal", MagicMock()
        )
        served = {}

        def serve_forever(server, *args, **kwargs):
            served["port"] = server.port
            raise KeyboardInterrupt

        monkeypatch.setattr(RpcServer, "serve_forever", serve_forever)
        return connections, served

    def test_binds_and_releases_resources(self, patched):
        connections, served = patched

        call_command("runrpcserver", host="127.0.0.1", port=0)

        assert served["port"] > 0
        connections.close_all.assert_called_once()


class TestSeedData:
    def test_seeds_products(self):
        call_command("seed_data", stdout=StringIO())
        assert Product.objects.available().count() == 15

    def test_is_idempotent(self):
        call_command("seed_data", stdout=StringIO())
        call_command("seed_data", stdout=StringIO())
        assert Product.objects.count() == 15

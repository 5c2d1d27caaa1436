import logging

import pytest

from modules.core.middleware import CorrelationIdMiddleware


class TestCorrelationIdInLogs:
    def test_correlation_id_in_logs(self, dispatcher, caplog):
        custom_id = "log-test-correlation-456"
        handler = CorrelationIdMiddleware(dispatcher.dispatch)
        with caplog.at_level(logging.INFO):
            handler({"pattern": {"cmd": "health_check"}, "data": {}, "id": custom_id})
        found = any(custom_id in record.getMessage() for record in caplog.records)
        assert found, (
            f"correlation_id '{custom_id}' not found in log records: "
            f"{[r.getMessage() for r in caplog.records]}"
        )

    def test_domain_logs_carry_correlation_id(self, dispatcher, caplog):
        custom_id = "create-correlation-789"
        handler = CorrelationIdMiddleware(dispatcher.dispatch)
        with caplog.at_level(logging.INFO):
            handler(
                {
                    "pattern": {"cmd": "create_product"},
                    "data": {"name": "Widget", "price": 1},
                    "id": custom_id,
                }
            )
        messages = [r.getMessage() for r in caplog.records]
        assert any("product.created" in m and custom_id in m for m in messages), messages

    def test_product_creation_is_logged_once(self, dispatcher, caplog):
        with caplog.at_level(logging.INFO):
            dispatcher.dispatch(
                {
                    "pattern": {"cmd": "create_product"},
                    "data": {"name": "Widget", "price": 1},
                    "id": "single-log",
                }
            )
        messages = [r.getMessage() for r in caplog.records]
        created = [m for m in messages if "product.created" in m or "product_created" in m]
        assert len(created) == 1, messages

"""
Chambre API: Middleware Tests
===============================

What:  Access-log lines and their levels; /health stays out of the log.
"""

import logging

import pytest

from chambre.middleware.logging import level_for_status


def access_records(caplog):
    return [r for r in caplog.records if r.name == "chambre.access"]


class TestLevelForStatus:

    def test_levels_follow_status_class(self):
        assert level_for_status(201) == logging.INFO
        assert level_for_status(304) == logging.INFO
        assert level_for_status(404) == logging.WARNING
        assert level_for_status(500) == logging.ERROR


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_one_line_per_request(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="chambre.access")

        await test_client.get("/rooms", headers={"X-Request-ID": "log0001"})

        records = access_records(caplog)
        assert len(records) == 1
        record = records[0]
        assert record.levelno == logging.INFO
        assert record.method == "GET"
        assert record.path == "/rooms"
        assert record.status == 200
        assert record.request_id == "log0001"
        assert record.getMessage().startswith("GET /rooms 200 ")

    @pytest.mark.asyncio
    async def test_client_errors_logged_as_warning(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="chambre.access")

        await test_client.post("/rooms", json={"roomNumber": "101"})

        records = access_records(caplog)
        assert [r.levelno for r in records] == [logging.WARNING]
        assert records[0].status == 400

    @pytest.mark.asyncio
    async def test_health_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="chambre.access")

        await test_client.get("/health")

        assert access_records(caplog) == []

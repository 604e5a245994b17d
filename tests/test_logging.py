import asyncio
import json
import logging

import pytest

from app.core.logging import LogContext, StructuredFormatter, get_logger

LOGGER_NAME = "pickupdesk.tests.log_context"


@pytest.mark.asyncio
async def test_log_context_is_isolated_between_tasks(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    log = get_logger("tests.log_context")
    first_entered = asyncio.Event()
    second_entered = asyncio.Event()
    first_left = asyncio.Event()

    async def first():
        with LogContext(mobile="1111111111"):
            first_entered.set()
            await second_entered.wait()
            log.info("first")
        first_left.set()

    async def second():
        await first_entered.wait()
        with LogContext(mobile="2222222222"):
            second_entered.set()
            await first_left.wait()
            log.info("second")

    await asyncio.gather(first(), second())
    log.info("after")

    records = {r.getMessage(): r for r in caplog.records if r.name == LOGGER_NAME}
    assert records["first"].mobile == "1111111111"
    assert records["second"].mobile == "2222222222"
    assert not hasattr(records["after"], "mobile")


def test_nested_context_merges_and_restores(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    log = get_logger("tests.log_context")

    with LogContext(mobile="9999999999"):
        with LogContext(user_id="abc"):
            log.info("inner")
        log.info("outer")

    records = {r.getMessage(): r for r in caplog.records if r.name == LOGGER_NAME}
    assert records["inner"].mobile == "9999999999"
    assert records["inner"].user_id == "abc"
    assert not hasattr(records["outer"], "user_id")


def test_structured_formatter_includes_context():
    record = logging.LogRecord(LOGGER_NAME, logging.INFO, __file__, 1, "hello", None, None)
    record.order_id = "65f0c0ffee"

    payload = json.loads(StructuredFormatter().format(record))
    assert payload["message"] == "hello"
    assert payload["order_id"] == "65f0c0ffee"
    assert "mobile" not in payload

import json
import logging
from decimal import Decimal

from lootshop.core.logging_config import JsonFormatter, RequestIdFilter, request_id_ctx_var


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("lootshop.test", logging.INFO, __file__, 1, "reward_issued", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extras_and_request_id() -> None:
    token = request_id_ctx_var.set("req-42")
    try:
        record = _record(tier="RARE", order_position=8)
        RequestIdFilter().filter(record)
        payload = json.loads(JsonFormatter().format(record))
    finally:
        request_id_ctx_var.reset(token)

    assert payload["message"] == "reward_issued"
    assert payload["request_id"] == "req-42"
    assert payload["tier"] == "RARE"
    assert payload["order_position"] == 8
    assert payload["level"] == "INFO"


def test_json_formatter_stringifies_unknown_values() -> None:
    payload = json.loads(JsonFormatter().format(_record(amount=Decimal("1.50"))))
    assert payload["amount"] == "1.50"
    assert payload["request_id"] == "-"

from io import StringIO
import json
import sys
import os

sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from blocklayer.logging_utils import JsonLinesLogger


def test_log_event_writes_one_sorted_json_line():
    buf = StringIO()
    logger = JsonLinesLogger(buf)

    logger.log_event(time=100, ledger_id="main", event="block_sealed", height=1, block_hash="ab" * 32)

    lines = buf.getvalue().splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record == {"time": 100, "ledger": "main", "event": "block_sealed", "height": 1, "hash": "ab" * 32}
    # sort_keys=True
    assert lines[0] == json.dumps(record, sort_keys=True)

def test_log_event_optional_fields_omitted():
    buf = StringIO()
    logger = JsonLinesLogger(buf)

    logger.log_event(time=0, ledger_id="main", event="audit_complete", extra={"checked": 3, "tampered": []})

    record = json.loads(buf.getvalue())
    assert "height" not in record
    assert "hash" not in record
    assert record["checked"] == 3
    assert record["tampered"] == []

def test_log_event_extra_cannot_overwrite_core_fields():
    buf = StringIO()
    logger = JsonLinesLogger(buf)

    logger.log_event(
        time=7, ledger_id="main", event="block_tampered", height=2,
        extra={"time": 0, "event": "forged", "ledger": "other", "height": 9, "note": "kept"},
    )

    record = json.loads(buf.getvalue())
    assert record["time"] == 7
    assert record["event"] == "block_tampered"
    assert record["ledger"] == "main"
    assert record["height"] == 2
    assert record["note"] == "kept"

import json
import logging

from sora_risk.config import LoggingConfig
from sora_risk.logging_utils import JsonFormatter, configure_logging


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord("sora_risk.ground", logging.WARNING, __file__, 1, "mitigation_conflict", None, None)
    record.mitigation = "M1A"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "mitigation_conflict"
    assert payload["level"] == "WARNING"
    assert payload["mitigation"] == "M1A"
    assert "lineno" not in payload


def test_configure_logging_rotating_file(tmp_path) -> None:
    log_file = tmp_path / "sora.log"
    configure_logging(LoggingConfig(level="INFO", log_file=str(log_file)))
    logging.getLogger("sora_risk.test").info("assessment_completed", extra={"sail": "II"})
    for handler in logging.getLogger().handlers:
        handler.flush()
    line = log_file.read_text().strip().splitlines()[-1]
    assert json.loads(line)["sail"] == "II"
    configure_logging(LoggingConfig())

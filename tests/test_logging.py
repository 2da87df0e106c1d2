import json
import logging

from arow_classifier.config import LoggingConfig
from arow_classifier.logging_utils import JsonFormatter, configure_logging


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord("arow_classifier.codec", logging.INFO, __file__, 1, "model_saved", (), None)
    record.dimension = 8
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "model_saved"
    assert payload["level"] == "INFO"
    assert payload["dimension"] == 8
    assert "lineno" not in payload


def test_configure_logging_writes_to_file(tmp_path) -> None:
    log_file = tmp_path / "arow.log"
    configure_logging(LoggingConfig(level="INFO", log_file=str(log_file)))
    logging.getLogger("arow_classifier.test").info("epoch_completed", extra={"examples": 3})
    for handler in logging.getLogger().handlers:
        handler.flush()

    line = log_file.read_text().strip().splitlines()[-1]
    assert json.loads(line)["examples"] == 3

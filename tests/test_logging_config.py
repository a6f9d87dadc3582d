import logging

import pytest

from condenserlab.logging_config import setup_logging, setup_logging_from_env


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger("condenserlab")
    yield
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "lab.log"
    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    logging.getLogger("condenserlab.test").debug("hello from the bench")
    for handler in logging.getLogger("condenserlab").handlers:
        handler.flush()
    content = log_file.read_text(encoding="utf-8")
    assert "Logging initialized." in content
    assert "hello from the bench" in content


def test_setup_is_idempotent():
    setup_logging()
    setup_logging()
    assert len(logging.getLogger("condenserlab").handlers) == 1


def test_level_from_env():
    setup_logging_from_env({"CONDENSERLAB_LOG_LEVEL": "debug"})
    assert logging.getLogger("condenserlab").level == logging.DEBUG

    setup_logging_from_env({"CONDENSERLAB_LOG_LEVEL": "nonsense"})
    assert logging.getLogger("condenserlab").level == logging.INFO

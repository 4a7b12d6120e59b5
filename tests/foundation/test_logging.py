import logging

import pytest

from moselect.foundation.logging import configure_moselect_logging, get_logger


@pytest.fixture
def clean_package_logger(monkeypatch):
    logger = logging.getLogger("moselect")
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "propagate", True)
    level = logger.level
    yield logger
    logger.setLevel(level)


def test_configure_attaches_single_handler(clean_package_logger, monkeypatch):
    # pytest attaches its capture handler to the root logger for the test call.
    monkeypatch.setattr(logging.getLogger(), "handlers", [])
    logger = configure_moselect_logging(level="debug")
    assert logger is clean_package_logger
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    # A second call leaves the existing handler alone.
    configure_moselect_logging()
    assert len(logger.handlers) == 1


def test_configure_respects_existing_root_handlers(clean_package_logger, monkeypatch):
    monkeypatch.setattr(logging.getLogger(), "handlers", [logging.NullHandler()])
    configure_moselect_logging()
    assert clean_package_logger.handlers == []


def test_configure_rejects_unknown_level(clean_package_logger):
    with pytest.raises(ValueError):
        configure_moselect_logging(level="loud")


def test_get_logger_namespaces_names():
    assert get_logger().name == "moselect"
    assert get_logger("moselect.engine.survival").name == "moselect.engine.survival"
    assert get_logger("plugins").name == "moselect.plugins"


def test_fallback_is_logged_at_debug(caplog):
    import numpy as np

    from moselect.engine.reference.normalization import find_intercepts

    with caplog.at_level(logging.DEBUG, logger="moselect"):
        _, fallback = find_intercepts(np.zeros((3, 3)), [0, 1, 2])
    assert fallback
    assert any("axis maxima" in rec.getMessage() for rec in caplog.records)

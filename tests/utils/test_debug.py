import importlib
import logging

from renamer.utils import debug as debug_mod


def test_setup_logger_is_idempotent():
    logger = debug_mod.setup_logger()
    assert logger.name == "renamer"
    assert debug_mod.setup_logger() is logger
    assert len(logger.handlers) == 1


def test_debug_respects_env(monkeypatch, caplog):
    monkeypatch.setenv("RENAMER_DEBUG", "1")
    importlib.reload(debug_mod)
    try:
        with caplog.at_level(logging.DEBUG, logger="renamer"):
            debug_mod.debug("visible message")
        assert "visible message" in caplog.text
    finally:
        monkeypatch.delenv("RENAMER_DEBUG")
        importlib.reload(debug_mod)

    caplog.clear()
    debug_mod.debug("hidden message")
    assert "hidden message" not in caplog.text

import logging

from rich.logging import RichHandler

from resumeaid import logger


def _fresh_root(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "_resumeaid_configured", False, raising=False)
    for name in logger.NOISY_LOGGERS:
        monkeypatch.setattr(logging.getLogger(name), "level", logging.NOTSET)
    monkeypatch.setattr(root, "level", root.level)
    return root


def test_configure_logging_uses_stderr_rich_handler(monkeypatch):
    root = _fresh_root(monkeypatch)
    logger.configure_logging("info")

    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler, RichHandler)
    assert handler.console.stderr
    assert root.level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING


def test_debug_level_lets_noisy_loggers_through(monkeypatch):
    _fresh_root(monkeypatch)
    monkeypatch.setenv("RESUMEAID_LOG_LEVEL", "debug")
    logger.configure_logging()

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("uvicorn.access").level == logging.DEBUG


def test_configure_logging_runs_once(monkeypatch):
    root = _fresh_root(monkeypatch)
    logger.configure_logging("warning")
    logger.configure_logging("debug")

    assert len(root.handlers) == 1
    assert root.level == logging.WARNING

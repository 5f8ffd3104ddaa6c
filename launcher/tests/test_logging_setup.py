"""
Tests for console/file logging configuration.
"""

import json
import logging
import pytest
from rich.logging import RichHandler

from mc_launcher.logging_setup import get_logger, setup_logging
from mc_launcher.settings import Settings


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    launcher_log = logging.getLogger("mc.launcher")
    for h in list(launcher_log.handlers):
        launcher_log.removeHandler(h)
        h.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_rich_console_and_plain_file(tmp_path):
    setup_logging(Settings(mc_root=tmp_path, log_level="debug"))

    assert any(isinstance(h, RichHandler) for h in logging.getLogger().handlers)
    get_logger("mc.launcher.test").info("Installed plugin %s", "Vault.jar")
    for h in logging.getLogger("mc.launcher").handlers:
        h.flush()

    line = (tmp_path / "logs" / "launcher.log").read_text(encoding="utf-8").strip()
    assert line.endswith("INFO     mc.launcher.test: Installed plugin Vault.jar")


def test_json_lines(tmp_path):
    setup_logging(Settings(mc_root=tmp_path, log_json=True))

    assert not any(isinstance(h, RichHandler) for h in logging.getLogger().handlers)
    get_logger("mc.launcher.test").warning("Port unchanged (%s)", 25565)
    for h in logging.getLogger("mc.launcher").handlers:
        h.flush()

    record = json.loads((tmp_path / "logs" / "launcher.log").read_text(encoding="utf-8").splitlines()[-1])
    assert record["level"] == "WARNING"
    assert record["logger"] == "mc.launcher.test"
    assert record["msg"] == "Port unchanged (25565)"


def test_repeated_setup_does_not_duplicate_file_handlers(tmp_path):
    settings = Settings(mc_root=tmp_path)
    setup_logging(settings)
    setup_logging(settings)
    assert len(logging.getLogger("mc.launcher").handlers) == 1


def test_unwritable_root_keeps_console_logging(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")

    setup_logging(Settings(mc_root=blocker))

    assert logging.getLogger("mc.launcher").handlers == []
    assert len(logging.getLogger().handlers) == 1

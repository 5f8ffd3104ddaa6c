import logging

import pytest


@pytest.fixture(autouse=True)
def _isolate_logging():
    # cli.main() calls setup_logging(), which replaces global handlers; restore them per test
    root = logging.getLogger()
    launcher_log = logging.getLogger("mc.launcher")
    saved_root = (list(root.handlers), root.level)
    saved_launcher = list(launcher_log.handlers)
    yield
    for h in list(launcher_log.handlers):
        if h not in saved_launcher:
            h.close()
    launcher_log.handlers[:] = saved_launcher
    root.handlers[:] = saved_root[0]
    root.setLevel(saved_root[1])

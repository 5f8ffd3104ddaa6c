from __future__ import annotations
from pathlib import Path
from typing import Iterable, List
from .errors import PluginNotFoundError
from .fetch import download_or_copy
from .logging_setup import get_logger

log = get_logger("mc.launcher.plugins")

PLUGIN_SUFFIX = ".jar"


class PluginManager:
    """Add-on packages: the ``.jar`` files directly inside a server's plugins directory."""

    def __init__(self, plugins_dir: Path, *, timeout: float = 60.0):
        self.plugins_dir = Path(plugins_dir)
        self.timeout = timeout

    def exists(self) -> bool:
        return self.plugins_dir.is_dir()

    def installed(self) -> List[str]:
        if not self.exists():
            return []
        return sorted(
            p.name for p in self.plugins_dir.iterdir()
            if p.is_file() and p.name.endswith(PLUGIN_SUFFIX)
        )

    def _require(self, name: str) -> Path:
        path = self.plugins_dir / name
        if name not in self.installed():
            raise PluginNotFoundError(f"Plugin {name!r} is not installed in {self.plugins_dir}")
        return path

    def install(self, source: str) -> Path:
        dest = download_or_copy(source, self.plugins_dir, timeout=self.timeout)
        if not dest.name.endswith(PLUGIN_SUFFIX):
            log.warning("%s does not end in %s and will not be listed as a plugin", dest.name, PLUGIN_SUFFIX)
        log.info("Installed plugin %s", dest.name)
        return dest

    def update(self, name: str, source: str) -> Path:
        old = self._require(name)
        log.info("Updating %s", name)
        new = download_or_copy(source, self.plugins_dir, timeout=self.timeout)
        if new.name != old.name:
            log.info("Removing previous version %s", old.name)
            old.unlink()
        return new

    def remove(self, names: Iterable[str]) -> List[str]:
        paths = [self._require(n) for n in names]
        removed = []
        for p in paths:
            log.info("Removing %s", p.name)
            p.unlink()
            removed.append(p.name)
        return removed

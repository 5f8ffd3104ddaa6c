from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from .settings import Settings
from .logging_setup import get_logger

log = get_logger("mc.launcher.fs")

@dataclass(frozen=True)
class Layout:
    root: Path
    server_dir: Path
    server_jar: Path
    plugins: Path
    eula: Path
    properties: Path
    logs: Path

def build_layout(settings: Settings, version: str) -> Layout:
    root = settings.mc_root
    server_dir = root / version
    return Layout(
        root=root,
        server_dir=server_dir,
        server_jar=server_dir / settings.server_jar,
        plugins=server_dir / "plugins",
        eula=server_dir / "eula.txt",
        properties=server_dir / "server.properties",
        logs=root / "logs",
    )

def ensure_root(root: Path) -> bool:
    """Create the servers working directory; returns True if it was missing."""
    if root.is_dir():
        return False
    log.info("Creating servers directory %s", root)
    root.mkdir(parents=True, exist_ok=True)
    return True

from __future__ import annotations
import json
from pathlib import Path
from typing import Dict, List, Optional
from pydantic import ValidationError
from .errors import CatalogError, UnknownVersionError
from .models import CatalogFile
from .settings import Settings
from .logging_setup import get_logger

log = get_logger("mc.launcher.catalog")

BUILTIN_SERVERS: Dict[str, str] = {
    "1.21.1": "https://api.papermc.io/v2/projects/paper/versions/1.21.1/builds/132/downloads/paper-1.21.1-132.jar",
}


class Catalog:
    def __init__(self, servers: Dict[str, str]):
        self._servers = dict(servers)

    def versions(self) -> List[str]:
        return list(self._servers)

    def url_for(self, version: str) -> str:
        try:
            return self._servers[version]
        except KeyError:
            raise UnknownVersionError(
                f"Unknown server version {version!r} (known: {', '.join(self._servers) or 'none'})"
            ) from None

    def default_version(self) -> Optional[str]:
        """The only known version, or None when there is a choice to make."""
        return next(iter(self._servers)) if len(self._servers) == 1 else None

    def to_dict(self) -> Dict[str, str]:
        return dict(self._servers)


def read_catalog_file(path: Path) -> CatalogFile:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return CatalogFile.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise CatalogError(f"Invalid version catalog {path}: {e}") from e


def load_catalog(settings: Settings) -> Catalog:
    servers = dict(BUILTIN_SERVERS)
    path = settings.resolved_catalog_file()
    if path.is_file():
        log.info("Loading version catalog: %s", path)
        servers.update(read_catalog_file(path).versions)
    elif settings.catalog_file:
        raise CatalogError(f"Version catalog {path} does not exist")
    return Catalog(servers)

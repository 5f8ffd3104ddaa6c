from __future__ import annotations
import shutil
from typing import List, Optional
from .catalog import Catalog, load_catalog
from .fetch import download_file
from .fs_layout import build_layout, ensure_root
from .plugins import PluginManager
from .process_runner import ProcessRunner
from .properties import accept_eula_file, read_port_file, write_port_file
from .settings import Settings
from .logging_setup import get_logger

log = get_logger("mc.launcher.orch")

class Orchestrator:
    """Lifecycle of the server installation for one version."""

    def __init__(self, settings: Settings, version: str, *, catalog: Optional[Catalog] = None,
                 runner: Optional[ProcessRunner] = None):
        self.settings = settings
        self.version = version
        self.layout = build_layout(settings, version)
        self.runner = runner or ProcessRunner()
        self._catalog = catalog
        self.plugins = PluginManager(self.layout.plugins, timeout=settings.download_timeout)

    @property
    def catalog(self) -> Catalog:
        if self._catalog is None:
            self._catalog = load_catalog(self.settings)
        return self._catalog

    @property
    def installed(self) -> bool:
        return self.layout.server_dir.is_dir()

    def prepare_environment(self) -> None:
        ensure_root(self.layout.root)

    def _java_cmd(self, *extra: str) -> List[str]:
        return [self.settings.java_binary, *self.settings.java_args, "-jar", self.settings.server_jar, *extra]

    def ensure_server(self) -> bool:
        """
        Download and initialise the server on first use.

        The first boot generates eula.txt and server.properties; the EULA is
        then accepted so the next start actually runs the server.
        Returns True if a setup was performed.
        """
        if self.installed:
            log.debug("Server %s already present at %s", self.version, self.layout.server_dir)
            return False

        url = self.catalog.url_for(self.version)
        log.info("Setting up server %s in %s", self.version, self.layout.server_dir)
        self.prepare_environment()
        self.layout.server_dir.mkdir()
        # a half-initialised directory would count as installed on the next run
        try:
            download_file(url, self.layout.server_jar, timeout=self.settings.download_timeout)
            self.runner.run("first-boot", self._java_cmd(), cwd=self.layout.server_dir,
                            stdout_prefix="[out] ", stderr_prefix="[err] ")
            accept_eula_file(self.layout.eula)
        except BaseException:
            log.error("Setup of server %s failed, removing %s", self.version, self.layout.server_dir)
            shutil.rmtree(self.layout.server_dir, ignore_errors=True)
            raise
        log.info("Server setup finished!")
        return True

    def start_server(self) -> int:
        return self.runner.run("server", self._java_cmd("-nogui"), cwd=self.layout.server_dir)

    def remove_server(self) -> None:
        log.info("Removing server %s (%s)", self.version, self.layout.server_dir)
        if self.installed:
            shutil.rmtree(self.layout.server_dir)

    def current_port(self) -> int:
        return read_port_file(self.layout.properties)

    def set_port(self, port: int) -> int:
        return write_port_file(self.layout.properties, port)

    def status(self) -> dict:
        return {
            "version": self.version,
            "installed": self.installed,
            "server_dir": str(self.layout.server_dir),
            "plugins": self.plugins.installed(),
            "processes": self.runner.status(),
        }

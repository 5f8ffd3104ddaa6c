"""
Interactive action loop: pick a version, make sure the server exists,
then offer the fixed list of actions until the user quits.
"""
from __future__ import annotations
from typing import Callable, Dict, Optional
from .catalog import Catalog, load_catalog
from .errors import LauncherError
from .fs_layout import ensure_root
from .orchestrator import Orchestrator
from .prompts import Prompter
from .properties import validate_port
from .settings import Settings
from .logging_setup import get_logger

log = get_logger("mc.launcher.menu")

QUIT = "Quit"
START = "Start"
REMOVE = "Remove"
INSTALL_PLUGIN = "Install Plugin"
UPDATE_PLUGIN = "Update Plugin"
REMOVE_PLUGIN = "Remove Plugin"
SET_PORT = "Set Port"

ACTIONS = [QUIT, START, REMOVE, INSTALL_PLUGIN, UPDATE_PLUGIN, REMOVE_PLUGIN, SET_PORT]

PLUGIN_SOURCE_QUESTION = "Where is your plugin located? (URL or File path)"


class Menu:
    def __init__(self, orch: Orchestrator, prompter: Prompter):
        self.orch = orch
        self.prompter = prompter
        # handlers return True to leave the loop
        self.handlers: Dict[str, Callable[[], bool]] = {
            START: self.start,
            REMOVE: self.remove,
            INSTALL_PLUGIN: self.install_plugin,
            UPDATE_PLUGIN: self.update_plugin,
            REMOVE_PLUGIN: self.remove_plugins,
            SET_PORT: self.set_port,
        }

    def run(self) -> int:
        while True:
            action = self.prompter.select("Which action do you want to perform?", ACTIONS)
            if action == QUIT:
                return 0
            try:
                if self.handlers[action]():
                    return 0
            except (LauncherError, OSError, ValueError) as e:
                log.error("%s failed: %s", action, e)

    def start(self) -> bool:
        self.prompter.clear()
        rc = self.orch.start_server()
        if rc != 0:
            log.warning("Server stopped with exit code %s", rc)
        return False

    def remove(self) -> bool:
        if not self.prompter.confirm("Do you really want to remove the server?"):
            return False
        self.orch.remove_server()
        return True

    def install_plugin(self) -> bool:
        source = self.prompter.text(PLUGIN_SOURCE_QUESTION)
        self.orch.plugins.install(source)
        return False

    def _installed_plugins(self):
        plugins = self.orch.plugins
        if not plugins.exists():
            log.error("Plugins directory %s does not exist. Start the server once or install a plugin first.",
                      plugins.plugins_dir)
            return []
        installed = plugins.installed()
        if not installed:
            log.warning("There are no plugins installed.")
        return installed

    def update_plugin(self) -> bool:
        installed = self._installed_plugins()
        if not installed:
            return False
        name = self.prompter.select("Which plugin should be updated?", installed)
        source = self.prompter.text(PLUGIN_SOURCE_QUESTION)
        self.orch.plugins.update(name, source)
        return False

    def remove_plugins(self) -> bool:
        installed = self._installed_plugins()
        if not installed:
            return False
        names = self.prompter.multiselect("Which plugins should be removed?", installed)
        if not names:
            log.info("Nothing selected.")
            return False
        self.orch.plugins.remove(names)
        return False

    def set_port(self) -> bool:
        old = self.orch.current_port()
        new = self.prompter.integer("What should be the new port?", default=old, validate=validate_port)
        if new == old:
            log.info("Port unchanged (%s)", old)
            return False
        self.orch.set_port(new)
        return False


def run_interactive(settings: Settings, prompter: Optional[Prompter] = None, *, version: Optional[str] = None,
                    catalog: Optional[Catalog] = None) -> int:
    prompter = prompter or Prompter()
    catalog = catalog or load_catalog(settings)
    ensure_root(settings.mc_root)

    if version is None:
        version = prompter.select("Which version should be launched?", catalog.versions())
    orch = Orchestrator(settings, version, catalog=catalog)
    orch.ensure_server()
    return Menu(orch, prompter).run()

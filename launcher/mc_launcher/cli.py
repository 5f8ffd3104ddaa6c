from __future__ import annotations
import argparse
import json
from typing import Optional
from rich.console import Console
from rich.table import Table
from .catalog import Catalog, load_catalog
from .errors import LauncherError, UnknownVersionError
from .logging_setup import setup_logging, get_logger
from .menu import run_interactive
from .orchestrator import Orchestrator
from .prompts import Prompter
from .settings import Settings

log = get_logger("mc.launcher.cli")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mc-launcher", description="Manage a local Paper server")
    parser.add_argument("-s", "--server-version", dest="version", default=None,
                        help="Server version to manage (default: the only catalog version)")
    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("menu", help="Interactive menu (default)")
    sub.add_parser("versions", help="Print the known server versions as JSON")
    sub.add_parser("status", help="Print installation status as JSON")
    sub.add_parser("install", help="Download and initialise the server if missing")
    sub.add_parser("start", help="Install if needed, then run the server attached to this console")

    rm_p = sub.add_parser("remove", help="Delete the server installation")
    rm_p.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    pl_p = sub.add_parser("plugins", help="Manage plugins")
    pl_sub = pl_p.add_subparsers(dest="plugins_cmd", required=True)
    pl_sub.add_parser("list", help="List installed plugins")
    pi = pl_sub.add_parser("install", help="Install a plugin from a URL or file path")
    pi.add_argument("source")
    pu = pl_sub.add_parser("update", help="Replace an installed plugin")
    pu.add_argument("name")
    pu.add_argument("source")
    pr = pl_sub.add_parser("remove", help="Remove installed plugins")
    pr.add_argument("names", nargs="+")

    port_p = sub.add_parser("port", help="Print the server port, or set it")
    port_p.add_argument("new_port", nargs="?", type=int)
    return parser

def _resolve_version(catalog: Catalog, requested: Optional[str]) -> str:
    if requested:
        catalog.url_for(requested)
        return requested
    version = catalog.default_version()
    if version is None:
        raise UnknownVersionError(
            f"Several versions are known ({', '.join(catalog.versions())}); pick one with --server-version"
        )
    return version

def _print_plugins(console: Console, orch: Orchestrator) -> None:
    table = Table(title=f"Plugins ({orch.version})")
    table.add_column("#", justify="right")
    table.add_column("File")
    for i, name in enumerate(orch.plugins.installed(), 1):
        table.add_row(str(i), name)
    console.print(table)

def _run(args, settings: Settings, console: Console) -> int:
    catalog = load_catalog(settings)

    if args.cmd in (None, "menu"):
        return run_interactive(settings, Prompter(console), version=args.version, catalog=catalog)

    if args.cmd == "versions":
        print(json.dumps(catalog.to_dict(), indent=2, ensure_ascii=False))
        return 0

    orch = Orchestrator(settings, _resolve_version(catalog, args.version), catalog=catalog)

    if args.cmd == "status":
        print(json.dumps(orch.status(), indent=2, ensure_ascii=False))
        return 0

    if args.cmd == "install":
        orch.prepare_environment()
        if not orch.ensure_server():
            log.info("Server %s is already installed.", orch.version)
        return 0

    if args.cmd == "start":
        orch.prepare_environment()
        orch.ensure_server()
        return orch.start_server()

    if args.cmd == "remove":
        if not orch.installed:
            log.warning("Server %s is not installed.", orch.version)
            return 0
        if not args.yes and not Prompter(console).confirm("Do you really want to remove the server?"):
            return 0
        orch.remove_server()
        return 0

    if args.cmd == "plugins":
        if args.plugins_cmd == "list":
            _print_plugins(console, orch)
        elif args.plugins_cmd == "install":
            orch.plugins.install(args.source)
        elif args.plugins_cmd == "update":
            orch.plugins.update(args.name, args.source)
        elif args.plugins_cmd == "remove":
            orch.plugins.remove(args.names)
        return 0

    if args.cmd == "port":
        if args.new_port is None:
            print(orch.current_port())
        else:
            orch.set_port(args.new_port)
        return 0

    return 2

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings()
    setup_logging(settings)
    console = Console()

    try:
        return _run(args, settings, console)
    except LauncherError as e:
        log.error("%s", e)
        return 1
    except ValueError as e:
        # e.g. an out-of-range port given on the command line
        log.error("%s", e)
        return 1
    except (KeyboardInterrupt, EOFError):
        console.print()
        return 130

"""
Edits of the plain ``key=value`` files the server writes on first boot:
``server.properties`` (network port) and ``eula.txt``.
"""
from __future__ import annotations
import re
from pathlib import Path
from .errors import PropertiesError
from .logging_setup import get_logger

log = get_logger("mc.launcher.properties")

PORT_PATTERN = re.compile(r"server-port=(?P<port>\d+)")
EULA_PATTERN = re.compile(r"^(?P<key>[ \t]*eula[ \t]*=[ \t]*)(?P<value>[^\s#]*)", re.IGNORECASE | re.MULTILINE)

MIN_PORT = 0
MAX_PORT = 65535


def validate_port(value) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Port must be an integer, got {value!r}") from None
    if not MIN_PORT <= port <= MAX_PORT:
        raise ValueError("Port must be a positive integer lower than 65536")
    return port


def read_port(text: str) -> int:
    m = PORT_PATTERN.search(text)
    if not m:
        raise PropertiesError("Malformed server.properties file. Cannot process.")
    return int(m.group("port"))


def replace_port(text: str, new_port: int) -> str:
    port = validate_port(new_port)
    return PORT_PATTERN.sub(f"server-port={port}", text)


def accept_eula(text: str) -> str:
    if EULA_PATTERN.search(text):
        return EULA_PATTERN.sub(lambda m: m.group("key") + "true", text)
    newline = "\r\n" if "\r\n" in text else "\n"
    if text and not text.endswith(("\n", "\r")):
        text += newline
    return text + "eula=true" + newline


def _read(path: Path) -> str:
    # newline="" keeps \r\n intact when the file is written back
    with path.open("r", encoding="utf-8", newline="") as f:
        return f.read()


def _write(path: Path, text: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)


def read_port_file(path: Path) -> int:
    if not path.is_file():
        raise PropertiesError("Please start the server at least one time first to modify the port!")
    return read_port(_read(path))


def write_port_file(path: Path, new_port: int) -> int:
    """Rewrite the port in ``path``; returns the previous port."""
    old = read_port_file(path)
    text = _read(path)
    _write(path, replace_port(text, new_port))
    log.info("Changed server-port %s -> %s in %s", old, new_port, path)
    return old


def accept_eula_file(path: Path) -> None:
    text = _read(path) if path.is_file() else ""
    _write(path, accept_eula(text))
    log.info("Accepted EULA in %s", path)

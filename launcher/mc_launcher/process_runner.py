from __future__ import annotations
import subprocess
import sys
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, List, Optional
from .errors import ProcessLaunchError
from .logging_setup import get_logger

log = get_logger("mc.launcher.proc")

@dataclass
class ProcessHandle:
    name: str
    proc: subprocess.Popen
    readers: List[threading.Thread] = field(default_factory=list)

def forward_stream(pipe: IO[str], sink: IO[str], prefix: str = "") -> None:
    """Copy ``pipe`` line by line to ``sink``, prepending ``prefix``."""
    try:
        for line in iter(pipe.readline, ""):
            sink.write(prefix + line)
            sink.flush()
    except (OSError, ValueError):
        log.debug("Stream closed while forwarding", exc_info=True)
    finally:
        try:
            pipe.close()
        except OSError:
            pass

class ProcessRunner:
    def __init__(self):
        self.handles: List[ProcessHandle] = []

    def start(self, name: str, cmd: List[str], *, cwd: Optional[Path] = None,
              stdout_prefix: Optional[str] = None, stderr_prefix: Optional[str] = None) -> ProcessHandle:
        log.info("Starting %s: %s", name, " ".join(cmd))
        # stdin stays inherited so console commands reach the server
        stdout = subprocess.PIPE if stdout_prefix else None
        stderr = subprocess.PIPE if stderr_prefix else None
        try:
            proc = subprocess.Popen(cmd, cwd=str(cwd) if cwd else None, stdout=stdout, stderr=stderr,
                                    text=True, bufsize=1, encoding="utf-8", errors="replace")
        except FileNotFoundError as e:
            raise ProcessLaunchError(f"Cannot start {name}: {cmd[0]} not found") from e
        except OSError as e:
            raise ProcessLaunchError(f"Cannot start {name}: {e}") from e

        h = ProcessHandle(name=name, proc=proc)
        for pipe, sink, prefix in ((proc.stdout, sys.stdout, stdout_prefix), (proc.stderr, sys.stderr, stderr_prefix)):
            if not prefix:
                continue
            t = threading.Thread(target=forward_stream, args=(pipe, sink, prefix), daemon=True)
            t.start()
            h.readers.append(t)
        self.handles.append(h)
        return h

    def wait(self, handle: ProcessHandle) -> int:
        while True:
            try:
                rc = handle.proc.wait()
                break
            except KeyboardInterrupt:
                # the child got the same SIGINT; let it save and exit
                log.info("Interrupted, waiting for %s (pid=%s) to stop...", handle.name, handle.proc.pid)
        for t in handle.readers:
            t.join(timeout=5)
        log.info("%s exited with rc=%s", handle.name, rc)
        return int(rc)

    def run(self, name: str, cmd: List[str], *, cwd: Optional[Path] = None,
            stdout_prefix: Optional[str] = None, stderr_prefix: Optional[str] = None) -> int:
        h = self.start(name, cmd, cwd=cwd, stdout_prefix=stdout_prefix, stderr_prefix=stderr_prefix)
        try:
            return self.wait(h)
        finally:
            self.handles.remove(h)

    def status(self) -> dict:
        return {h.name: {"pid": h.proc.pid, "returncode": h.proc.poll()} for h in self.handles}

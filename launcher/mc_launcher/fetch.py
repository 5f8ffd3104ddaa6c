"""
Download-or-copy helper used for the server jar and for plugins.

A source given by the user is either an http(s) URL, which is downloaded,
or a path on the local file system, which is copied.
"""
from __future__ import annotations
import http.client
import os
import re
import shutil
import tempfile
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Union
from .errors import FetchError, SourceNotFoundError
from .logging_setup import get_logger

log = get_logger("mc.launcher.fetch")

CHUNK_SIZE = 64 * 1024
_PATH_SEPARATORS = re.compile(r"[\\/]")
USER_AGENT = "mc-launcher"


def is_http_url(text: str) -> bool:
    try:
        parsed = urllib.parse.urlparse(text.strip())
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def filename_from_url(url: str) -> str:
    path = urllib.parse.urlparse(url).path
    segment = urllib.parse.unquote(path.rstrip("/").rsplit("/", 1)[-1])
    # %2F or %5C may decode into a path; keep only its last component
    name = _PATH_SEPARATORS.split(segment)[-1]
    if not name or name in (".", "..") or "\0" in name:
        raise FetchError(f"Cannot derive a file name from {url}")
    return name


def _clean_source(source: str) -> str:
    # drag-and-drop into a terminal often quotes the path
    return source.strip().strip("'\"").strip()


def download_file(url: str, destination: Path, *, timeout: float = 60.0) -> Path:
    """Stream ``url`` into ``destination``; the target only appears once complete."""
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    log.info("Downloading %s", url)

    fd, tmp_name = tempfile.mkstemp(prefix=".download-", dir=str(destination.parent))
    tmp = Path(tmp_name)
    try:
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
        with os.fdopen(fd, "wb") as out, urllib.request.urlopen(req, timeout=timeout) as response:
            shutil.copyfileobj(response, out, CHUNK_SIZE)
        os.replace(tmp, destination)
    except urllib.error.HTTPError as e:
        log.error("Download failed!")
        raise FetchError(f"Download of {url} failed: HTTP {e.code} {e.reason}") from e
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError, OverflowError) as e:
        # malformed urls (spaces, bad port) fail inside urlopen, not in is_http_url
        log.error("Download failed!")
        raise FetchError(f"Download of {url} failed: {e}") from e
    finally:
        if tmp.exists():
            tmp.unlink()

    log.info("Download completed! (%s)", destination)
    return destination


def download_or_copy(source: str, destination_dir: Union[str, Path], *, timeout: float = 60.0) -> Path:
    """
    Put the file named by ``source`` into ``destination_dir``.

    URLs are downloaded under the last segment of their path, local files
    are copied under their base name. Returns the path of the new file.
    """
    source = _clean_source(source)
    destination_dir = Path(destination_dir)
    if not source:
        raise SourceNotFoundError("No file or URL given.")

    if is_http_url(source):
        return download_file(source, destination_dir / filename_from_url(source), timeout=timeout)

    src = Path(source).expanduser()
    if not src.exists():
        raise SourceNotFoundError(f"The given file does not exist on your system. ({source})")
    if not src.is_file():
        raise FetchError(f"The given path is not a file. ({source})")

    destination_dir.mkdir(parents=True, exist_ok=True)
    dest = destination_dir / src.name
    if src.resolve() == dest.resolve():
        log.info("%s is already in place", dest)
        return dest
    log.info("Copying %s -> %s", src, dest)
    shutil.copy2(src, dest)
    return dest

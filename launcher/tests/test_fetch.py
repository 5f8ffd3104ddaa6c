"""
Tests for the download-or-copy helper.
"""

import http.client
import io
import urllib.error
import pytest
from pathlib import Path
from unittest.mock import patch

from mc_launcher.errors import FetchError, SourceNotFoundError
from mc_launcher.fetch import download_file, download_or_copy, filename_from_url, is_http_url


class TestIsHttpUrl:
    @pytest.mark.parametrize("text", [
        "https://example.org/plugin.jar",
        "http://example.org/a/b/c.jar?token=1",
        "  https://hangar.papermc.io/x.jar  ",
    ])
    def test_urls(self, text):
        assert is_http_url(text)

    @pytest.mark.parametrize("text", [
        "",
        "plugin.jar",
        "/home/me/plugins/plugin.jar",
        "C:\\Users\\me\\plugin.jar",
        "ftp://example.org/plugin.jar",
        "file:///tmp/plugin.jar",
        "https://",
    ])
    def test_not_urls(self, text):
        assert not is_http_url(text)


class TestFilenameFromUrl:
    def test_last_segment(self):
        url = "https://api.papermc.io/v2/projects/paper/versions/1.21.1/builds/132/downloads/paper-1.21.1-132.jar"
        assert filename_from_url(url) == "paper-1.21.1-132.jar"

    def test_query_and_fragment_stripped(self):
        assert filename_from_url("https://cdn.example.org/files/Essentials.jar?x=1#top") == "Essentials.jar"

    def test_percent_decoded(self):
        assert filename_from_url("https://example.org/My%20Plugin.jar") == "My Plugin.jar"

    def test_no_name(self):
        with pytest.raises(FetchError):
            filename_from_url("https://example.org/")


class TestDownloadOrCopy:
    def test_copies_local_file(self, tmp_path):
        src = tmp_path / "src" / "WorldEdit.jar"
        src.parent.mkdir()
        src.write_bytes(b"jar-bytes")
        dest_dir = tmp_path / "plugins"

        result = download_or_copy(str(src), dest_dir)

        assert result == dest_dir / "WorldEdit.jar"
        assert result.read_bytes() == b"jar-bytes"
        assert src.exists()

    def test_strips_quotes_from_dropped_paths(self, tmp_path):
        src = tmp_path / "Vault.jar"
        src.write_bytes(b"v")
        result = download_or_copy(f"'{src}'\n", tmp_path / "plugins")
        assert result.name == "Vault.jar"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceNotFoundError, match="does not exist"):
            download_or_copy(str(tmp_path / "nope.jar"), tmp_path / "plugins")
        assert not (tmp_path / "plugins").exists()

    def test_directory_is_rejected(self, tmp_path):
        with pytest.raises(FetchError):
            download_or_copy(str(tmp_path), tmp_path / "plugins")

    def test_empty_source(self, tmp_path):
        with pytest.raises(SourceNotFoundError):
            download_or_copy("   ", tmp_path)

    def test_url_is_downloaded_under_its_name(self, tmp_path):
        with patch("mc_launcher.fetch.download_file") as mock_download:
            mock_download.side_effect = lambda url, dest, timeout: dest
            result = download_or_copy("https://example.org/dl/LuckPerms-5.4.jar", tmp_path, timeout=5)

        assert result == tmp_path / "LuckPerms-5.4.jar"
        mock_download.assert_called_once_with(
            "https://example.org/dl/LuckPerms-5.4.jar", tmp_path / "LuckPerms-5.4.jar", timeout=5
        )


class TestDownloadFile:
    def test_writes_response_body(self, tmp_path):
        dest = tmp_path / "server" / "server.jar"
        with patch("mc_launcher.fetch.urllib.request.urlopen", return_value=io.BytesIO(b"paper")):
            result = download_file("https://example.org/paper.jar", dest)

        assert result == dest
        assert dest.read_bytes() == b"paper"
        assert [p.name for p in dest.parent.iterdir()] == ["server.jar"]

    def test_http_error_leaves_nothing_behind(self, tmp_path):
        err = urllib.error.HTTPError("https://example.org/x.jar", 404, "Not Found", {}, None)
        with patch("mc_launcher.fetch.urllib.request.urlopen", side_effect=err):
            with pytest.raises(FetchError, match="404"):
                download_file("https://example.org/x.jar", tmp_path / "x.jar")

        assert list(tmp_path.iterdir()) == []

    def test_network_error(self, tmp_path):
        with patch("mc_launcher.fetch.urllib.request.urlopen", side_effect=urllib.error.URLError("offline")):
            with pytest.raises(FetchError, match="offline"):
                download_file("https://example.org/x.jar", tmp_path / "x.jar")


class TestUrlEdgeCases:
    @pytest.mark.parametrize("url", [
        "https://example.org/..%2F..%2Fevil.jar",
        "https://example.org/dl/..%5C..%5Cevil.jar",
    ])
    def test_encoded_separators_cannot_escape(self, url):
        assert filename_from_url(url) == "evil.jar"

    def test_nul_byte_rejected(self):
        with pytest.raises(FetchError):
            filename_from_url("https://example.org/evil%00.jar")

    def test_encoded_traversal_stays_in_destination(self, tmp_path):
        dest_dir = tmp_path / "srv" / "plugins"
        with patch("mc_launcher.fetch.urllib.request.urlopen", return_value=io.BytesIO(b"x")):
            result = download_or_copy("https://example.org/..%2F..%2Fevil.jar", dest_dir)

        assert result == dest_dir / "evil.jar"
        assert not (tmp_path / "evil.jar").exists()

    @pytest.mark.parametrize("error", [
        http.client.InvalidURL("URL can't contain control characters"),
        ValueError("Port out of range 0-65535"),
        OverflowError("port must be 0-65535."),
    ])
    def test_malformed_url_is_a_fetch_error(self, tmp_path, error):
        with patch("mc_launcher.fetch.urllib.request.urlopen", side_effect=error):
            with pytest.raises(FetchError):
                download_file("https://example.org/my plugin.jar", tmp_path / "my plugin.jar")
        assert list(tmp_path.iterdir()) == []

"""
Tests for content fingerprints and governed-file access.

Covers:
- SHA-256 fingerprints (byte-exact, no normalization)
- read() trimming and missing-file handling
- write() create/overwrite, permission preservation, failure reporting
"""

import hashlib
import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from devguard.core.fingerprint import fingerprint, fingerprints_match
from devguard.core.file_access import FileWriteError, exists, read, write


class TestFingerprint:
    """Fingerprints decide compliance, so they must be exact."""

    def test_matches_sha256_hex(self):
        """Fingerprint is the lowercase SHA-256 hex digest of the UTF-8 text."""
        text = '{"semi": true}'
        assert fingerprint(text) == hashlib.sha256(text.encode('utf-8')).hexdigest()
        assert len(fingerprint(text)) == 64

    def test_same_text_same_fingerprint(self):
        assert fingerprints_match("node_modules\ndist", "node_modules\ndist")

    def test_single_byte_difference(self):
        """Inner whitespace is significant."""
        assert not fingerprints_match("a  b", "a b")

    def test_non_ascii_text(self):
        assert fingerprint("✔ done") == hashlib.sha256("✔ done".encode('utf-8')).hexdigest()


class TestRead:
    """read() returns trimmed text or None."""

    def test_missing_file_returns_none(self, tmp_path):
        assert read(tmp_path / "absent.json") is None

    def test_strips_surrounding_whitespace(self, tmp_path):
        path = tmp_path / ".gitignore"
        path.write_text("\n\nnode_modules\ndist\n\n", encoding='utf-8')
        assert read(path) == "node_modules\ndist"

    def test_invalid_utf8_is_replaced(self, tmp_path):
        """Undecodable bytes do not raise; they read as U+FFFD."""
        path = tmp_path / ".gitignore"
        path.write_bytes(b"# caf\xe9\nnode_modules\n")
        assert read(path) == "# caf\ufffd\nnode_modules"

    def test_line_endings_are_preserved(self, tmp_path):
        path = tmp_path / "tsconfig.json"
        path.write_bytes(b"{\r\n}\r\n")
        assert read(path) == "{\r\n}"

    def test_empty_file_reads_as_empty_string(self, tmp_path):
        """An empty file exists; it is not the same as a missing one."""
        path = tmp_path / "tsconfig.json"
        path.write_text("   \n", encoding='utf-8')
        assert read(path) == ""
        assert exists(path)


class TestWrite:
    """write() replaces the whole file or raises FileWriteError."""

    def test_creates_file(self, tmp_path):
        path = tmp_path / ".prettierrc"
        write(path, '{"semi": true}')
        assert path.read_text(encoding='utf-8') == '{"semi": true}'

    def test_overwrites_existing_file(self, tmp_path):
        path = tmp_path / "tsconfig.json"
        path.write_text("old content that is much longer than the new one", encoding='utf-8')
        write(path, "{}")
        assert path.read_text(encoding='utf-8') == "{}"

    def test_leaves_no_temp_files(self, tmp_path):
        write(tmp_path / "eslint.config.js", "module.exports = [];")
        assert [p.name for p in tmp_path.iterdir()] == ["eslint.config.js"]

    @pytest.mark.skipif(os.name == 'nt', reason="POSIX permissions")
    def test_preserves_permissions(self, tmp_path):
        path = tmp_path / "script.js"
        path.write_text("old", encoding='utf-8')
        os.chmod(path, 0o640)
        write(path, "new")
        assert stat.S_IMODE(path.stat().st_mode) == 0o640

    def test_missing_directory_raises_file_write_error(self, tmp_path):
        """Write failures surface as FileWriteError naming the path."""
        path = tmp_path / "no_such_dir" / "tsconfig.json"
        with pytest.raises(FileWriteError) as exc_info:
            write(path, "{}")
        assert exc_info.value.path == path
        assert isinstance(exc_info.value, OSError)

    def test_failed_rename_cleans_up(self, tmp_path):
        """When the final rename fails, the temp file is removed."""
        path = tmp_path / ".gitignore"
        with patch('devguard.core.file_access.os.replace',
                   side_effect=PermissionError(13, 'Permission denied')):
            with pytest.raises(FileWriteError) as exc_info:
                write(path, "node_modules")

        assert "Permission denied" in str(exc_info.value)
        assert list(tmp_path.iterdir()) == []

"""
Unit tests for FileScannerImpl.
Verifies regular-file enumeration, skipping rules, laziness and error tolerance.
"""
import os
import sys
import types
import pytest
from dirdiff.core.scanner import FileScannerImpl
from dirdiff.core.models import FileRecord


class TestFileScannerImpl:
    """Test tree enumeration."""

    def test_finds_all_regular_files_recursively(self, archive_tree, temp_dir):
        records = list(FileScannerImpl(str(temp_dir)).scan())

        assert {r.path for r in records} == {str(p) for p in archive_tree.values()}
        assert all(isinstance(r, FileRecord) for r in records)

    def test_identical_content_gets_identical_fingerprints(self, archive_tree, temp_dir):
        by_path = {r.path: r.fingerprint for r in FileScannerImpl(str(temp_dir)).scan()}

        assert by_path[str(archive_tree["album_beach"])] == by_path[str(archive_tree["date_beach1"])]
        assert by_path[str(archive_tree["album_beach"])] != by_path[str(archive_tree["album_portrait"])]

    def test_deeply_nested_files_are_found(self, temp_dir):
        deep = temp_dir / "a" / "b" / "c" / "d" / "e"
        deep.mkdir(parents=True)
        (deep / "deep.txt").write_bytes(b"deep")

        paths = [r.path for r in FileScannerImpl(str(temp_dir)).scan()]
        assert paths == [str(deep / "deep.txt")]

    def test_empty_files_are_enumerated(self, temp_dir):
        (temp_dir / "empty.txt").write_bytes(b"")

        records = list(FileScannerImpl(str(temp_dir)).scan())
        assert len(records) == 1

    def test_directories_are_not_records(self, temp_dir):
        (temp_dir / "only_dirs" / "nested").mkdir(parents=True)
        assert list(FileScannerImpl(str(temp_dir)).scan()) == []

    def test_scan_is_lazy(self, temp_dir):
        (temp_dir / "file.txt").write_bytes(b"data")

        result = FileScannerImpl(str(temp_dir)).scan()
        assert isinstance(result, types.GeneratorType)

    def test_relative_root_gives_absolute_paths(self, temp_dir, monkeypatch):
        (temp_dir / "album").mkdir()
        (temp_dir / "album" / "pic.jpg").write_bytes(b"pic")
        monkeypatch.chdir(temp_dir)

        [record] = FileScannerImpl("album").scan()
        assert os.path.isabs(record.path)
        assert record.path.endswith(os.path.join("album", "pic.jpg"))

    def test_dot_root_keeps_parent_folder_name(self, temp_dir, monkeypatch):
        day = temp_dir / "2023-01-01"
        day.mkdir()
        (day / "x.jpg").write_bytes(b"x")
        monkeypatch.chdir(day)

        [record] = FileScannerImpl(".").scan()
        assert os.path.basename(os.path.dirname(record.path)) == "2023-01-01"

    def test_reports_progress(self, archive_tree, temp_dir):
        calls = []
        list(FileScannerImpl(str(temp_dir)).scan(
            progress_callback=lambda stage, current, total: calls.append((stage, current, total))
        ))

        assert calls[-1] == ("hashing", len(archive_tree), None)


@pytest.mark.skipif(sys.platform == "win32", reason="Symlinks and FIFOs need POSIX")
class TestSkippedEntries:
    """Symlinks and non-regular entries are skipped silently."""

    def test_skips_symlink_to_file(self, temp_dir):
        target = temp_dir / "real.txt"
        target.write_bytes(b"real")
        (temp_dir / "link.txt").symlink_to(target)

        paths = [r.path for r in FileScannerImpl(str(temp_dir)).scan()]
        assert paths == [str(target)]

    def test_does_not_descend_symlinked_directories(self, temp_dir):
        outside = temp_dir / "outside"
        outside.mkdir()
        (outside / "secret.txt").write_bytes(b"secret")
        root = temp_dir / "root"
        root.mkdir()
        (root / "linked").symlink_to(outside, target_is_directory=True)

        assert list(FileScannerImpl(str(root)).scan()) == []

    def test_skips_broken_symlink(self, temp_dir):
        (temp_dir / "dangling").symlink_to(temp_dir / "missing")
        assert list(FileScannerImpl(str(temp_dir)).scan()) == []

    def test_skips_fifo(self, temp_dir):
        os.mkfifo(temp_dir / "pipe")
        (temp_dir / "file.txt").write_bytes(b"x")

        paths = [r.path for r in FileScannerImpl(str(temp_dir)).scan()]
        assert paths == [str(temp_dir / "file.txt")]


class TestErrorHandling:
    """Invalid roots fail fast, transient errors are absorbed."""

    def test_missing_root_raises(self, temp_dir):
        scanner = FileScannerImpl(str(temp_dir / "nope"))
        with pytest.raises(RuntimeError, match="Directory does not exist"):
            list(scanner.scan())

    def test_file_root_raises(self, temp_dir):
        path = temp_dir / "file.txt"
        path.write_bytes(b"x")
        with pytest.raises(RuntimeError, match="Not a directory"):
            FileScannerImpl(str(path)).validate()

    def test_walk_errors_are_absorbed(self, temp_dir):
        """The walk error handler logs and returns, it never raises."""
        error = PermissionError(13, "Permission denied", str(temp_dir / "locked"))
        assert FileScannerImpl._on_walk_error(error) is None

    @pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0,
                        reason="Permission bits are not enforced for root")
    def test_unreadable_directory_is_skipped(self, temp_dir):
        (temp_dir / "ok").mkdir()
        (temp_dir / "ok" / "good.txt").write_bytes(b"good")
        locked = temp_dir / "locked"
        locked.mkdir()
        (locked / "hidden.txt").write_bytes(b"hidden")
        locked.chmod(0o000)
        try:
            paths = [r.path for r in FileScannerImpl(str(temp_dir)).scan()]
        finally:
            locked.chmod(0o755)

        assert paths == [str(temp_dir / "ok" / "good.txt")]

    def test_entry_vanishing_before_stat_is_skipped(self, temp_dir, monkeypatch):
        (temp_dir / "stays.txt").write_bytes(b"stays")
        (temp_dir / "goes.txt").write_bytes(b"goes")

        real_lstat = os.lstat

        def flaky_lstat(path, *args, **kwargs):
            if str(path).endswith("goes.txt"):
                raise FileNotFoundError(2, "No such file or directory", str(path))
            return real_lstat(path, *args, **kwargs)

        monkeypatch.setattr("dirdiff.core.scanner.os.lstat", flaky_lstat)

        paths = [r.path for r in FileScannerImpl(str(temp_dir)).scan()]
        assert paths == [str(temp_dir / "stays.txt")]

    def test_unreadable_file_is_still_enumerated(self, temp_dir, monkeypatch):
        """Hash failures yield the sentinel fingerprint, the file stays visible."""
        (temp_dir / "locked.jpg").write_bytes(b"locked")

        import builtins
        real_open = builtins.open

        def denying_open(file, mode="r", *args, **kwargs):
            if str(file).endswith("locked.jpg"):
                raise PermissionError(13, "Permission denied", str(file))
            return real_open(file, mode, *args, **kwargs)

        monkeypatch.setattr(builtins, "open", denying_open)

        records = list(FileScannerImpl(str(temp_dir)).scan())
        assert len(records) == 1
        assert records[0].fingerprint == 0

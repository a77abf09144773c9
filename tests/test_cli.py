"""
Critical CLI tests: argument validation, mode selection, output and exit codes.
These tests make sure nothing is touched when arguments are wrong.
"""
import sys
from unittest import mock
import pytest
from dirdiff.cli import CLIApplication, main, EXIT_OK, EXIT_ERROR, EXIT_PARTIAL
from dirdiff.services.file_service import FileService


def run_cli(*argv) -> int:
    with mock.patch.object(sys, 'argv', ['dirdiff', *map(str, argv)]):
        return CLIApplication().run()


class TestArgumentValidation:
    """Malformed arguments are reported before any scanning."""

    def test_missing_dir1_is_an_argparse_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli()
        assert exc_info.value.code == 2
        assert "dir1" in capsys.readouterr().err

    def test_nonexistent_directory(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(temp_dir / "missing")
        assert exc_info.value.code == EXIT_ERROR
        assert "Directory not found" in capsys.readouterr().err

    def test_file_instead_of_directory(self, temp_dir, capsys):
        path = temp_dir / "file.txt"
        path.write_bytes(b"x")
        with pytest.raises(SystemExit):
            run_cli(path)
        assert "Path is not a directory" in capsys.readouterr().err

    def test_missing_dir2_touches_nothing(self, archive_tree, temp_dir):
        with mock.patch.object(FileService, 'delete_file') as mock_delete:
            with pytest.raises(SystemExit):
                run_cli(temp_dir, temp_dir / "missing")
        mock_delete.assert_not_called()
        assert all(p.exists() for p in archive_tree.values())

    def test_quiet_and_verbose_conflict(self, temp_dir, capsys):
        with pytest.raises(SystemExit):
            run_cli(temp_dir, "--quiet", "--verbose")
        assert "cannot be used together" in capsys.readouterr().err

    @pytest.mark.parametrize("flag", [["--dry-run"], ["--trash"], ["--on-error", "continue"],
                                      ["--reap", "single-pass"], ["--date-prefix", "19"]])
    def test_dedup_options_rejected_in_diff_mode(self, temp_dir, flag, capsys):
        (temp_dir / "left").mkdir()
        (temp_dir / "right").mkdir()
        with pytest.raises(SystemExit):
            run_cli(temp_dir / "left", temp_dir / "right", *flag)
        assert "only apply when a single directory is given" in capsys.readouterr().err

    def test_empty_date_prefix(self, temp_dir, capsys):
        with pytest.raises(SystemExit):
            run_cli(temp_dir, "--date-prefix", " ")
        assert "Date prefix cannot be empty" in capsys.readouterr().err

    def test_create_dedup_params_maps_options(self, temp_dir):
        app = CLIApplication()
        args = app.parse_args([str(temp_dir), "--trash", "--on-error", "continue",
                               "--reap", "single-pass", "--date-prefix", "19", "--dry-run"])
        params = app.create_dedup_params(args)

        assert params.root_dir == str(temp_dir)
        assert params.method.value == "trash"
        assert params.on_error.value == "continue"
        assert params.reap.value == "single-pass"
        assert params.date_prefix == "19"
        assert params.dry_run is True


class TestSingleDirectoryMode:

    def test_deletes_date_copies_and_prints_actions(self, archive_tree, temp_dir, capsys):
        code = run_cli(temp_dir)

        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert f"Deleting {archive_tree['date_beach1']}" in out
        assert f"Deleting {archive_tree['date_beach2']}" in out
        assert f"Removing empty directory {temp_dir / '2023-01-01'}" in out
        assert "to hash 7 files" in out
        assert not archive_tree["date_beach1"].exists()
        assert archive_tree["album_beach"].exists()

    def test_dry_run(self, archive_tree, temp_dir, capsys):
        code = run_cli(temp_dir, "--dry-run")

        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert f"Would delete {archive_tree['date_beach1']}" in out
        assert all(p.exists() for p in archive_tree.values())

    def test_quiet_suppresses_output(self, archive_tree, temp_dir, capsys):
        run_cli(temp_dir, "--quiet")
        assert capsys.readouterr().out == ""
        assert not archive_tree["date_beach1"].exists()

    def test_verbose_prints_statistics(self, archive_tree, temp_dir, capsys):
        run_cli(temp_dir, "--verbose")
        assert "Run Statistics:" in capsys.readouterr().out

    def test_abort_exits_with_error(self, archive_tree, temp_dir, capsys):
        with mock.patch.object(FileService, 'delete_file', side_effect=RuntimeError("denied")):
            with pytest.raises(SystemExit) as exc_info:
                run_cli(temp_dir)
        assert exc_info.value.code == EXIT_ERROR
        assert "Run aborted" in capsys.readouterr().err

    def test_continue_exits_with_partial_code(self, archive_tree, temp_dir, capsys):
        with mock.patch.object(FileService, 'delete_file', side_effect=RuntimeError("denied")):
            code = run_cli(temp_dir, "--on-error", "continue")

        err = capsys.readouterr().err
        assert code == EXIT_PARTIAL
        assert "2 item(s) could not be removed" in err

    def test_trash_flag_moves_to_trash(self, archive_tree, temp_dir):
        with mock.patch.object(FileService, 'move_to_trash') as mock_trash:
            run_cli(temp_dir, "--trash")

        trashed = sorted(call.args[0] for call in mock_trash.call_args_list)
        assert trashed == sorted([str(archive_tree["date_beach1"]), str(archive_tree["date_beach2"])])


class TestDiffMode:

    def test_prints_unmatched_paths_only_on_stdout(self, temp_dir, capsys):
        left = temp_dir / "left"
        right = temp_dir / "right"
        left.mkdir()
        right.mkdir()
        (left / "shared.jpg").write_bytes(b"shared")
        (right / "shared_renamed.jpg").write_bytes(b"shared")
        (left / "mine.jpg").write_bytes(b"mine")
        (right / "yours.jpg").write_bytes(b"yours")

        code = run_cli(left, right)

        captured = capsys.readouterr()
        assert code == EXIT_OK
        assert captured.out.splitlines() == [str(left / "mine.jpg"), str(right / "yours.jpg")]
        assert "Diffing the directories" in captured.err

    def test_diff_does_not_delete(self, archive_tree, temp_dir):
        other = temp_dir.parent / (temp_dir.name + "_other")
        other.mkdir()
        run_cli(temp_dir, other)
        assert all(p.exists() for p in archive_tree.values())


class TestMain:

    def test_main_exits_with_run_code(self, temp_dir):
        with mock.patch.object(sys, 'argv', ['dirdiff', str(temp_dir), '--quiet']):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == EXIT_OK

    def test_keyboard_interrupt(self, temp_dir):
        with mock.patch.object(CLIApplication, 'run', side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 130

"""CLI argument handling tests.

Verifies how ``binocular.cli.main`` resolves the search root, merges
command-line overrides into config, and turns fatal errors into exits.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from binocular import cli
from binocular.config import PickerConfig
from binocular.errors import ConfigError, TerminalError


class CliMainTests(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch("binocular.cli.configure_logging")
        self.configure_logging = patcher.start()
        self.addCleanup(patcher.stop)
        config_patcher = mock.patch("binocular.cli.load_config", return_value=PickerConfig())
        self.load_config = config_patcher.start()
        self.addCleanup(config_patcher.stop)

    def test_main_defaults_to_current_working_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                with mock.patch("binocular.cli.run_picker") as run_picker:
                    cli.main([])
            finally:
                os.chdir(previous_cwd)

        run_picker.assert_called_once()
        path, config = run_picker.call_args.args
        self.assertEqual(path, root)
        self.assertEqual(config, PickerConfig())

    def test_main_rejects_missing_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "nope"
            with mock.patch("binocular.cli.run_picker") as run_picker:
                with self.assertRaises(SystemExit) as ctx:
                    cli.main([str(missing)])

        self.assertIn("Not a directory", str(ctx.exception.code))
        run_picker.assert_not_called()

    def test_config_error_exits_with_message(self) -> None:
        self.load_config.side_effect = ConfigError("Invalid config.json: bad")
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("binocular.cli.run_picker") as run_picker:
                with self.assertRaises(SystemExit) as ctx:
                    cli.main([tmp])

        self.assertEqual(ctx.exception.code, "Invalid config.json: bad")
        run_picker.assert_not_called()

    def test_command_line_overrides_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("binocular.cli.run_picker") as run_picker:
                cli.main([tmp, "--context", "2", "--discard-stale"])

        _path, config = run_picker.call_args.args
        self.assertEqual(config.context_lines, 2)
        self.assertTrue(config.discard_stale_results)
        self.assertEqual(config.editor_command, PickerConfig().editor_command)

    def test_context_out_of_range_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("binocular.cli.run_picker"), mock.patch("sys.stderr"):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main([tmp, "--context", "-1"])

        self.assertEqual(ctx.exception.code, 2)

    def test_log_options_are_forwarded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "run.log"
            with mock.patch("binocular.cli.run_picker"):
                cli.main([tmp, "--log-level", "debug", "--log-file", str(log_path)])

        self.configure_logging.assert_called_once_with("DEBUG", log_path)

    def test_unwritable_log_file_exits_with_message(self) -> None:
        self.configure_logging.side_effect = PermissionError(13, "Permission denied", "/root/run.log")
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("binocular.cli.run_picker") as run_picker:
                with self.assertRaises(SystemExit) as ctx:
                    cli.main([tmp, "--log-file", "/root/run.log"])

        self.assertIn("Cannot open log file", str(ctx.exception.code))
        self.assertIn("Permission denied", str(ctx.exception.code))
        self.load_config.assert_not_called()
        run_picker.assert_not_called()

    def test_logging_is_configured_before_config_is_loaded(self) -> None:
        calls: list[str] = []
        self.configure_logging.side_effect = lambda *_a: calls.append("logging")
        self.load_config.side_effect = lambda *_a: calls.append("config") or PickerConfig()
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("binocular.cli.run_picker"):
                cli.main([tmp])

        self.assertEqual(calls, ["logging", "config"])

    def test_terminal_error_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch(
                "binocular.cli.run_picker", side_effect=TerminalError("binocular needs an interactive terminal")
            ):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main([tmp])

        self.assertEqual(ctx.exception.code, "binocular needs an interactive terminal")


class RunPickerTests(unittest.TestCase):
    def test_requires_interactive_terminal(self) -> None:
        from binocular.runtime import app

        with mock.patch("binocular.runtime.app.os.isatty", return_value=False), mock.patch(
            "binocular.runtime.app.sys.stdin"
        ) as stdin, mock.patch("binocular.runtime.app.sys.stdout") as stdout, mock.patch(
            "binocular.runtime.app.run_main_loop"
        ) as run_main_loop:
            stdin.fileno.return_value = 0
            stdout.fileno.return_value = 1
            with self.assertRaises(TerminalError):
                app.run_picker(Path("."), PickerConfig())

        run_main_loop.assert_not_called()

    def test_wires_config_into_loop(self) -> None:
        from binocular.runtime import app

        config = PickerConfig(context_lines=1, discard_stale_results=True)
        with mock.patch("binocular.runtime.app.os.isatty", return_value=True), mock.patch(
            "binocular.runtime.app.sys.stdin"
        ) as stdin, mock.patch("binocular.runtime.app.sys.stdout") as stdout, mock.patch(
            "binocular.runtime.app.TerminalController"
        ), mock.patch("binocular.runtime.app.run_main_loop") as run_main_loop:
            stdin.fileno.return_value = 0
            stdout.fileno.return_value = 1
            app.run_picker(Path("/tmp"), config)

        run_main_loop.assert_called_once()
        _session, picker, _terminal, theme, _timing = run_main_loop.call_args.args
        self.assertEqual(picker.root, Path("/tmp"))
        self.assertEqual(picker.dispatcher.context_lines, 1)
        self.assertEqual(theme, config.theme)
        self.assertTrue(run_main_loop.call_args.kwargs["discard_stale"])


if __name__ == "__main__":
    unittest.main()

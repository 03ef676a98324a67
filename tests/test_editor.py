from __future__ import annotations

import subprocess
import unittest
from pathlib import Path
from unittest import mock

from binocular.editor import launch_editor_at
from binocular.errors import EditorFailed, ToolNotInstalled


class LaunchEditorTests(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch("binocular.editor.shutil.which", return_value="/usr/bin/code")
        self.which = patcher.start()
        self.addCleanup(patcher.stop)

    def test_spawns_editor_with_goto_target_and_does_not_wait(self) -> None:
        with mock.patch("binocular.editor.subprocess.Popen") as popen_mock:
            launch_editor_at(("code", "--goto"), "src/a.py:12", cwd=Path("/tmp/project"))

        popen_mock.assert_called_once()
        self.assertEqual(popen_mock.call_args.args[0], ["code", "--goto", "src/a.py:12"])
        kwargs = popen_mock.call_args.kwargs
        self.assertEqual(kwargs["cwd"], Path("/tmp/project"))
        self.assertEqual(kwargs["stdout"], subprocess.DEVNULL)
        self.assertTrue(kwargs["start_new_session"])
        popen_mock.return_value.wait.assert_not_called()

    def test_missing_editor_binary_raises_tool_not_installed(self) -> None:
        self.which.return_value = None
        with mock.patch("binocular.editor.subprocess.Popen") as popen_mock:
            with self.assertRaises(ToolNotInstalled) as ctx:
                launch_editor_at(("code", "--goto"), "a.py:1")

        self.which.assert_called_once_with("code")
        popen_mock.assert_not_called()
        self.assertEqual(str(ctx.exception), "code is not installed")

    def test_missing_working_directory_is_an_editor_failure(self) -> None:
        error = FileNotFoundError(2, "No such file or directory", "/tmp/gone")
        with mock.patch("binocular.editor.subprocess.Popen", side_effect=error):
            with self.assertRaises(EditorFailed) as ctx:
                launch_editor_at(("code", "--goto"), "a.py:1", cwd=Path("/tmp/gone"))

        self.assertNotIsInstance(ctx.exception, ToolNotInstalled)
        self.assertIn("No such file or directory", str(ctx.exception))

    def test_other_spawn_errors_raise_editor_failed(self) -> None:
        with mock.patch("binocular.editor.subprocess.Popen", side_effect=PermissionError("denied")):
            with self.assertRaises(EditorFailed):
                launch_editor_at(("code",), "a.py:1")


if __name__ == "__main__":
    unittest.main()

"""Tests for specform.render.executor."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest

from specform.exceptions import ExecutionError
from specform.models import RenderedCommand
from specform.render.executor import execute_command


@pytest.fixture
def rendered() -> RenderedCommand:
    return RenderedCommand(
        command="curl -v -X GET http://h/users -H 'Content-Type: application/json' -d '{}'",
        host="http://h",
        is_placeholder=False,
        body="{}",
    )


class TestExecuteCommand:
    def test_runs_through_shell(self, rendered: RenderedCommand) -> None:
        completed = subprocess.CompletedProcess(args=[], returncode=0)
        with patch("specform.render.executor.subprocess.run", return_value=completed) as run:
            execute_command(rendered)
        run.assert_called_once_with(["sh", "-c", rendered.command], check=False)

    def test_non_zero_exit(self, rendered: RenderedCommand) -> None:
        completed = subprocess.CompletedProcess(args=[], returncode=7)
        with patch("specform.render.executor.subprocess.run", return_value=completed):
            with pytest.raises(ExecutionError, match="status 7"):
                execute_command(rendered)

    def test_shell_missing(self, rendered: RenderedCommand) -> None:
        with patch(
            "specform.render.executor.subprocess.run",
            side_effect=FileNotFoundError("sh"),
        ):
            with pytest.raises(ExecutionError, match="Could not run command"):
                execute_command(rendered)

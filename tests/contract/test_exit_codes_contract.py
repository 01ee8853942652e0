from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from aquavaluate.ai.imputation import ImputationError
from aquavaluate.cli import main as cli_main
from aquavaluate.cli.__main__ import EXIT_FATAL, EXIT_PARTIAL_FAILURE, EXIT_SUCCESS_ALL
from aquavaluate.logging.init import reset_logging

"""Exit code contract: 0 = all files ok, 2 = some file failed, 1 = fatal startup error."""


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


def test_exit_code_values():
    assert (EXIT_SUCCESS_ALL, EXIT_FATAL, EXIT_PARTIAL_FAILURE) == (0, 1, 2)


def test_exit_code_fatal_startup(temp_workdir: Path, capsys):
    assert cli_main([]) == EXIT_FATAL
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_fatal_on_invalid_config(temp_workdir: Path, capsys):
    (temp_workdir / "config" / "aquavaluate.yml").write_text("mapping: {}\n", encoding="utf-8")
    assert cli_main([]) == EXIT_FATAL


def test_exit_code_all_success(write_config, sample_csv, capsys):
    assert cli_main([]) == EXIT_SUCCESS_ALL


def test_exit_code_partial_failure_on_imputation_error(write_config, sample_csv, capsys):
    failing = MagicMock(side_effect=ImputationError("service unavailable"))
    with patch("aquavaluate.services.orchestrator.GeminiImputer", return_value=failing):
        code = cli_main(["--ai"])
    out = capsys.readouterr().out
    assert code == EXIT_PARTIAL_FAILURE
    assert "ERROR processing(ai): AI imputation failed: service unavailable" in out

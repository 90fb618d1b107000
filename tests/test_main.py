from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest

from pomconf.__main__ import _print_startup_error, main


@pytest.mark.unit
class TestMain:
    """Tests for the ``python -m pomconf`` entry point."""

    @pytest.mark.parametrize("exit_code", [0, 1, 130], ids=["success", "error", "interrupted"])
    def test_forwards_cli_exit_code(self, exit_code: int) -> None:
        """Test main returns whatever the CLI entry point returns."""
        mock_cli_module = MagicMock()
        mock_cli_module.main.return_value = exit_code

        with patch.dict(sys.modules, {"pomconf.cli": mock_cli_module}):
            result = main()

        assert result == exit_code
        mock_cli_module.main.assert_called_once_with()

    def test_import_failure_returns_one(self, capsys: pytest.CaptureFixture) -> None:
        """Test a broken CLI import is reported instead of raised."""
        # A None entry makes the import statement raise ImportError
        with patch.dict(sys.modules, {"pomconf.cli": None}):
            result = main()

        assert result == 1
        err = capsys.readouterr().err
        assert "pomconf CLI could not be loaded." in err
        assert "ImportError:" in err


@pytest.mark.unit
class TestPrintStartupError:
    """Tests for _print_startup_error."""

    def test_reports_version(self, capsys: pytest.CaptureFixture) -> None:
        with patch.dict(sys.modules, {"pomconf.__version__": MagicMock(__version__="9.9.9")}):
            _print_startup_error(ImportError("No module named 'rich'"))

        captured = capsys.readouterr()
        assert "pomconf version: 9.9.9" in captured.err
        assert "ImportError: No module named 'rich'" in captured.err
        assert captured.out == ""

    def test_unknown_version(self, capsys: pytest.CaptureFixture) -> None:
        with patch.dict(sys.modules, {"pomconf.__version__": None}):
            _print_startup_error(ImportError("broken"))

        assert "pomconf version: <unknown>" in capsys.readouterr().err

    def test_one_item_per_line(self, capsys: pytest.CaptureFixture) -> None:
        _print_startup_error(ImportError("broken"))

        lines = capsys.readouterr().err.splitlines()
        assert lines[0] == "pomconf CLI could not be loaded."
        assert lines[1].startswith("Python version : ")
        assert lines[-2:] == ["", "ImportError: broken"]

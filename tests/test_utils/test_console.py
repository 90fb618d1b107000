from __future__ import annotations

import sys
from io import StringIO
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from pomconf.utils.console import (
    POMCONF_THEME,
    _get_console,
    _should_use_color,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def reset_console() -> Generator[None, None, None]:
    """Reset the console singleton before and after each test."""
    reconfigure_console()
    yield
    reconfigure_console()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove environment variables that affect color detection."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("CI", raising=False)


@pytest.fixture
def captured() -> Generator[StringIO, None, None]:
    """Route console output into a buffer.

    Yields:
        StringIO: Buffer receiving everything printed through the helpers.
    """
    buffer = StringIO()
    console = Console(file=buffer, theme=POMCONF_THEME, no_color=True, width=200)
    with patch("pomconf.utils.console._get_console", return_value=console):
        yield buffer


# ==============================================================================
# Theme and color detection
# ==============================================================================


@pytest.mark.unit
class TestThemeConfiguration:
    """Tests for POMCONF_THEME."""

    @pytest.mark.parametrize(
        "style_name", ["success", "error", "warning", "info", "dim", "highlight"]
    )
    def test_theme_has_style(self, style_name: str) -> None:
        assert style_name in POMCONF_THEME.styles


@pytest.mark.unit
class TestShouldUseColor:
    """Tests for _should_use_color."""

    def test_no_color_env_disables(self, clean_env: None, monkeypatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")

        assert _should_use_color() is False

    def test_ci_env_disables(self, clean_env: None, monkeypatch) -> None:
        monkeypatch.setenv("CI", "true")

        assert _should_use_color() is False

    def test_tty_enables(self, clean_env: None) -> None:
        with patch.object(sys.stdout, "isatty", return_value=True):
            assert _should_use_color() is True

    def test_non_tty_disables(self, clean_env: None) -> None:
        with patch.object(sys.stdout, "isatty", return_value=False):
            assert _should_use_color() is False

    def test_isatty_error_disables(self, clean_env: None) -> None:
        with patch.object(sys.stdout, "isatty", side_effect=OSError):
            assert _should_use_color() is False


@pytest.mark.unit
class TestConsoleLifecycle:
    """Tests for the console singleton."""

    def test_singleton(self) -> None:
        assert _get_console() is _get_console()
        assert get_raw_console() is _get_console()

    def test_reconfigure_creates_new_console(self) -> None:
        first = _get_console()

        reconfigure_console()

        assert _get_console() is not first


# ==============================================================================
# Output helpers
# ==============================================================================


@pytest.mark.unit
class TestStatusMessages:
    """Tests for print_success, print_error and print_warning."""

    def test_success(self, captured: StringIO) -> None:
        print_success("Descriptor built")

        assert captured.getvalue().strip() == "[OK] Descriptor built"

    def test_error(self, captured: StringIO) -> None:
        print_error("Missing module")

        assert "[ERROR] Missing module" in captured.getvalue()

    def test_warning_custom_prefix(self, captured: StringIO) -> None:
        print_warning("Nothing found", prefix="!")

        assert captured.getvalue().strip() == "! Nothing found"


@pytest.mark.unit
class TestPrintTable:
    """Tests for print_table."""

    def test_empty_data_prints_nothing(self) -> None:
        mock_console = MagicMock()
        with patch("pomconf.utils.console._get_console", return_value=mock_console):
            print_table([])

        mock_console.print.assert_not_called()

    def test_headers_default_to_first_row(self, captured: StringIO) -> None:
        print_table([{"Group": "org.slf4j", "Artifact": "slf4j-api"}], title="Dependencies")

        output = captured.getvalue()
        assert "Dependencies" in output
        assert "Group" in output
        assert "slf4j-api" in output

    def test_explicit_headers_and_none_values(self, captured: StringIO) -> None:
        print_table(
            [{"Name": "junit", "Version": None, "Ignored": "x"}],
            headers=["Name", "Version"],
        )

        output = captured.getvalue()
        assert "junit" in output
        assert "None" not in output
        assert "Ignored" not in output

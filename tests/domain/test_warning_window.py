"""Tests for WarningWindow value object."""

from __future__ import annotations

import pytest

from entra_credential_audit.domain.value_objects import WarningWindow


class TestWarningWindow:
    """Tests for WarningWindow value object."""

    def test_default_window(self) -> None:
        """Default window should be 30 days."""
        assert WarningWindow().days == 30

    def test_contains_inside_window(self) -> None:
        """1 through the window size are inside."""
        window = WarningWindow(days=30)
        assert window.contains(1) is True
        assert window.contains(30) is True

    def test_excludes_expired_and_today(self) -> None:
        """Zero or negative days are never inside."""
        window = WarningWindow(days=30)
        assert window.contains(0) is False
        assert window.contains(-5) is False

    def test_excludes_beyond_window(self) -> None:
        """Days past the window are outside."""
        assert WarningWindow(days=30).contains(31) is False

    @pytest.mark.parametrize("days", [0, -1])
    def test_non_positive_window_invalid(self, days: int) -> None:
        """The window must be at least one day."""
        with pytest.raises(ValueError, match="at least 1 day"):
            WarningWindow(days=days)

    def test_window_is_frozen(self) -> None:
        """Window should be immutable."""
        window = WarningWindow()
        with pytest.raises(AttributeError):
            window.days = 10  # type: ignore[misc]

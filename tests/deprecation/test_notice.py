"""
Tests for runtime deprecation notices.

Tests notice emission and handler plumbing including:
- Warning category and message
- Best-effort delivery (never raises)
- Handler installation, chaining and restoration
- Pass-through of unrelated warnings
"""

import os
import warnings

import pytest

from flaphl_deprecation import (
    ConfigError,
    FlaphlDeprecationWarning,
    configure_deprecation_handler,
    get_deprecation_handler,
    trigger_deprecation,
)

# =============================================================================
# Test trigger_deprecation
# =============================================================================


@pytest.mark.unit
class TestTriggerDeprecation:
    """Test emitting deprecation notices."""

    def test_emits_deprecation_warning(self):
        """Test that a FlaphlDeprecationWarning is raised."""
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            trigger_deprecation("flaphl/test", "1.0", "This is deprecated")

            assert len(w) == 1
            assert issubclass(w[0].category, FlaphlDeprecationWarning)
            assert issubclass(w[0].category, DeprecationWarning)

    def test_message_is_built(self):
        """Test that the message carries the prefix and substitutions."""
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            trigger_deprecation("flaphl/test", "1.0", "%s() is deprecated", "old")

            assert str(w[0].message) == "Since flaphl/test 1.0: old() is deprecated"

    def test_warning_points_to_caller(self):
        """Test that the notice is attributed to the calling line."""
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            trigger_deprecation("flaphl/test", "1.0", "here")

            assert os.path.samefile(w[0].filename, __file__)

    def test_never_raises_when_filter_is_error(self):
        """Test that an 'error' filter does not propagate to the caller."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            trigger_deprecation("flaphl/test", "1.0", "swallowed")

    def test_never_raises_when_handler_fails(self):
        """Test that a failing handler does not propagate to the caller."""

        def failing_handler(message, file, line):
            raise RuntimeError("handler broke")

        with warnings.catch_warnings():
            configure_deprecation_handler(failing_handler)
            trigger_deprecation("flaphl/test", "1.0", "swallowed")

    def test_silent_by_default(self):
        """Test that notices follow normal filters when no handler is set."""
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("ignore")
            trigger_deprecation("flaphl/test", "1.0", "ignored")

            assert w == []


# =============================================================================
# Test configure_deprecation_handler
# =============================================================================


@pytest.mark.unit
class TestDeprecationHandler:
    """Test installing custom notice handlers."""

    def test_handler_receives_notice(self):
        """Test that the handler gets message, file and line."""
        calls = []

        with warnings.catch_warnings():
            configure_deprecation_handler(
                lambda message, file, line: calls.append((message, file, line))
            )
            trigger_deprecation("flaphl/test", "1.0", "This is deprecated")

        assert len(calls) == 1
        message, file, line = calls[0]
        assert message == "Since flaphl/test 1.0: This is deprecated"
        assert os.path.samefile(file, __file__)
        assert isinstance(line, int)

    def test_handler_sees_repeated_notices(self):
        """Test that notices from the same line are not deduplicated."""
        calls = []

        with warnings.catch_warnings():
            configure_deprecation_handler(lambda *a: calls.append(a))
            for _ in range(3):
                trigger_deprecation("flaphl/test", "1.0", "again")

        assert len(calls) == 3

    def test_returns_and_restores_previous_handler(self):
        """Test chaining: each install returns the one it replaced."""
        first_calls = []
        second_calls = []

        def first_handler(message, file, line):
            first_calls.append(message)

        def second_handler(message, file, line):
            second_calls.append(message)

        with warnings.catch_warnings():
            assert configure_deprecation_handler(first_handler) is None
            trigger_deprecation("test", "1.0", "First handler")
            assert first_calls == ["Since test 1.0: First handler"]
            assert second_calls == []

            previous = configure_deprecation_handler(second_handler)
            assert previous is first_handler
            trigger_deprecation("test", "1.0", "Second handler")
            assert len(first_calls) == 1
            assert second_calls == ["Since test 1.0: Second handler"]

            assert configure_deprecation_handler(previous) is second_handler
            trigger_deprecation("test", "1.0", "First again")
            assert first_calls[-1] == "Since test 1.0: First again"
            assert len(second_calls) == 1

    def test_none_restores_default_display(self):
        """Test that installing None removes the dispatcher."""
        with warnings.catch_warnings():
            original = warnings.showwarning
            configure_deprecation_handler(lambda *a: None)
            assert warnings.showwarning is not original
            assert get_deprecation_handler() is not None

            configure_deprecation_handler(None)

            assert warnings.showwarning is original
            assert get_deprecation_handler() is None

    def test_only_handles_deprecation_notices(self):
        """Test that other warnings reach the previous showwarning."""
        handled = []
        passed_through = []

        def recorder(message, category, filename, lineno, file=None, line=None):
            passed_through.append(category)

        with warnings.catch_warnings():
            warnings.simplefilter("always")
            warnings.showwarning = recorder
            configure_deprecation_handler(lambda *a: handled.append(a))

            warnings.warn("This is a warning", UserWarning)
            warnings.warn("Plain deprecation", DeprecationWarning)
            trigger_deprecation("test", "1.0", "handled")

        assert passed_through == [UserWarning, DeprecationWarning]
        assert len(handled) == 1

    def test_chained_handlers_share_original_fallback(self):
        """Test that replacing a handler does not stack dispatchers."""

        def recorder(message, category, filename, lineno, file=None, line=None):
            pass

        with warnings.catch_warnings():
            warnings.showwarning = recorder
            configure_deprecation_handler(lambda *a: None)
            configure_deprecation_handler(lambda *a: None)
            configure_deprecation_handler(None)

            assert warnings.showwarning is recorder

    def test_restore_leaves_filters_unchanged(self):
        """Test that an install/restore round trip restores the filter list."""
        with warnings.catch_warnings():
            before = list(warnings.filters)

            previous = configure_deprecation_handler(lambda *a: None)
            assert list(warnings.filters) != before
            configure_deprecation_handler(lambda *a: None)
            configure_deprecation_handler(previous)

            assert list(warnings.filters) == before

    def test_restored_default_is_silent_again(self):
        """Test that notices filtered out before an install stay filtered out."""
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("ignore")
            previous = configure_deprecation_handler(lambda *a: None)
            configure_deprecation_handler(previous)

            trigger_deprecation("flaphl/test", "1.0", "quiet again")

        assert w == []

    def test_existing_always_filter_is_kept(self):
        """Test that a filter the application added itself survives restore."""
        with warnings.catch_warnings():
            warnings.filterwarnings("always", category=FlaphlDeprecationWarning)
            before = list(warnings.filters)

            configure_deprecation_handler(lambda *a: None)
            configure_deprecation_handler(None)

            assert list(warnings.filters) == before

    def test_rejects_non_callable(self):
        """Test that a non-callable handler is rejected."""
        with pytest.raises(ConfigError):
            configure_deprecation_handler("not callable")  # type: ignore[arg-type]

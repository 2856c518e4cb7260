"""Exceptions raised by the notification view."""

from __future__ import annotations


class NotifyError(Exception):
    """Base class for notification errors."""


class NotifyConfigError(NotifyError, TypeError):
    """A callback, handle or option value has the wrong shape.

    These indicate a programming or configuration mistake and are raised
    rather than logged.
    """


def validate(**checks: tuple[object, type | tuple[type, ...] | str]) -> None:
    """Check ``name=(value, expected)`` pairs, raising :class:`NotifyConfigError`.

    *expected* is a type (or tuple of types), or the string ``"callable"``.
    """
    for name, (value, expected) in checks.items():
        if expected == "callable":
            ok = callable(value)
            label = "callable"
        else:
            # bool is an int subclass but never a valid identifier
            ok = isinstance(value, expected) and not isinstance(value, bool)  # type: ignore[arg-type]
            label = getattr(expected, "__name__", str(expected))
        if not ok:
            raise NotifyConfigError(
                f"{name}: expected {label}, got {type(value).__name__}"
            )

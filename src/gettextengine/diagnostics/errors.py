"""gettextengine exception hierarchy.

Locale-resolution and formatting failures are absorbed by the runtime and
turned into fallback values; these exceptions exist so that the absorbing
code has something precise to catch, log and test against. Only
HookNameError (and the TypeErrors raised for programmer misuse) escape to
callers.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "HookNameError",
    "I18nError",
    "PluralFormsError",
    "SprintfError",
]


class I18nError(Exception):
    """Base exception for all gettextengine errors."""


class SprintfError(I18nError, ValueError):
    """Format template could not be applied to its arguments.

    Raised by the format engine internals and always caught by sprintf(),
    which logs it and returns the template unchanged.

    Attributes:
        template: The format string being applied
        reason: Human-readable description of the failure
    """

    def __init__(self, template: str, reason: str) -> None:
        """Initialize SprintfError.

        Args:
            template: The format string being applied
            reason: Human-readable description of the failure
        """
        super().__init__(f"{reason} in format string {template!r}")
        self.template = template
        self.reason = reason


class PluralFormsError(I18nError, ValueError):
    """Plural-Forms metadata could not be compiled into a rule.

    Caught by the locale data store, which substitutes the default rule.

    Attributes:
        expression: The offending header or expression
    """

    def __init__(self, expression: str, reason: str) -> None:
        super().__init__(f"Invalid plural forms {expression!r}: {reason}")
        self.expression = expression


class HookNameError(I18nError, ValueError):
    """Hook name or namespace does not follow the naming rules."""

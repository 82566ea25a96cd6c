"""Error types for gettextengine.

Python 3.13+. Zero external dependencies.
"""

from .errors import HookNameError, I18nError, PluralFormsError, SprintfError

__all__ = [
    "HookNameError",
    "I18nError",
    "PluralFormsError",
    "SprintfError",
]

"""Named action and filter hooks.

I18n only needs two capabilities from a hooks system, captured by the
HookCapability protocol: registering an action callback, and applying a
named filter chain to a value. Hooks is the in-process implementation used
by default; any object satisfying the protocol can be passed instead.

Registry semantics:
    - Handlers are grouped by hook name and identified by namespace
    - Handlers run in ascending priority order, registration order within a
      priority
    - Adding a handler fires the ``hook_added`` action with
      (hook_name, namespace, callback, priority); removing handlers fires
      ``hook_removed`` with (hook_name, namespace)
    - Filters thread a value through every handler; actions discard results

Example:
    >>> hooks = Hooks()
    >>> hooks.add_filter("i18n.gettext", "my-plugin", lambda text, *_: text.upper())
    >>> hooks.apply_filters("i18n.gettext", "hello", "hello", None)
    'HELLO'

Python 3.13+. Zero external dependencies.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from gettextengine.constants import DEFAULT_PRIORITY, HOOK_ADDED, HOOK_REMOVED
from gettextengine.diagnostics import HookNameError

__all__ = ["HookCapability", "HookHandler", "Hooks", "default_hooks"]

logger = logging.getLogger(__name__)

_HOOK_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_.-]*$")
_NAMESPACE_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_.\-/]*$")


class HookCapability(Protocol):
    """What I18n requires from a hooks system."""

    def add_action(
        self,
        hook_name: str,
        namespace: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        ...  # pragma: no cover  # Protocol stub - not executable

    def remove_action(self, hook_name: str, namespace: str) -> int:
        ...  # pragma: no cover  # Protocol stub - not executable

    def apply_filters(self, hook_name: str, value: Any, *args: Any) -> Any:
        ...  # pragma: no cover  # Protocol stub - not executable


@dataclass(frozen=True, slots=True)
class HookHandler:
    """One registered callback.

    Attributes:
        callback: Function invoked when the hook runs
        namespace: Identifier of the registering code (used for removal)
        priority: Lower runs first
    """

    callback: Callable[..., Any]
    namespace: str
    priority: int


@dataclass(slots=True)
class _HookStore:
    handlers: list[HookHandler] = field(default_factory=list)
    runs: int = 0


def _validate_hook_name(hook_name: str) -> None:
    if not isinstance(hook_name, str) or not hook_name:
        msg = "Hook name must be a non-empty string"
        raise HookNameError(msg)
    if hook_name.startswith("__"):
        msg = f"Hook name '{hook_name}' cannot begin with '__'"
        raise HookNameError(msg)
    if not _HOOK_NAME_PATTERN.match(hook_name):
        msg = (
            f"Hook name '{hook_name}' must start with a letter and contain only "
            "letters, numbers, dashes, periods and underscores"
        )
        raise HookNameError(msg)


def _validate_namespace(namespace: str) -> None:
    if not isinstance(namespace, str) or not namespace:
        msg = "Namespace must be a non-empty string"
        raise HookNameError(msg)
    if not _NAMESPACE_PATTERN.match(namespace):
        msg = (
            f"Namespace '{namespace}' must start with a letter and contain only "
            "letters, numbers, dashes, periods, underscores and slashes"
        )
        raise HookNameError(msg)


class _HookRegistry:
    """Handlers for one kind of hook (filters or actions)."""

    __slots__ = ("_hooks", "_owner")

    def __init__(self, owner: "Hooks") -> None:
        self._owner = owner
        self._hooks: dict[str, _HookStore] = {}

    def add(
        self,
        hook_name: str,
        namespace: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        _validate_namespace(namespace)
        _validate_hook_name(hook_name)
        if not callable(callback):
            msg = f"Hook callback must be callable, got {type(callback).__name__}"
            raise TypeError(msg)
        if not isinstance(priority, int) or isinstance(priority, bool):
            msg = f"Hook priority must be an integer, got {type(priority).__name__}"
            raise TypeError(msg)

        store = self._hooks.setdefault(hook_name, _HookStore())
        position = len(store.handlers)
        while position > 0 and priority < store.handlers[position - 1].priority:
            position -= 1
        store.handlers.insert(position, HookHandler(callback, namespace, priority))
        logger.debug("Hook added: %s (%s, priority %d)", hook_name, namespace, priority)

        if hook_name != HOOK_ADDED:
            self._owner.do_action(HOOK_ADDED, hook_name, namespace, callback, priority)

    def remove(self, hook_name: str, namespace: str | None, *, remove_all: bool = False) -> int:
        _validate_hook_name(hook_name)
        if not remove_all:
            _validate_namespace(namespace)  # type: ignore[arg-type]

        store = self._hooks.get(hook_name)
        if store is None:
            return 0

        before = len(store.handlers)
        if remove_all:
            store.handlers = []
        else:
            store.handlers = [h for h in store.handlers if h.namespace != namespace]
        removed = before - len(store.handlers)
        logger.debug("Hook removed: %s (%s, %d handlers)", hook_name, namespace, removed)

        if removed and hook_name != HOOK_REMOVED:
            self._owner.do_action(HOOK_REMOVED, hook_name, namespace)
        return removed

    def has(self, hook_name: str, namespace: str | None = None) -> bool:
        store = self._hooks.get(hook_name)
        if store is None:
            return False
        if namespace is None:
            return bool(store.handlers)
        return any(h.namespace == namespace for h in store.handlers)

    def run(self, hook_name: str, args: tuple[Any, ...], *, return_first_arg: bool) -> Any:
        store = self._hooks.setdefault(hook_name, _HookStore())
        store.runs += 1

        value = args[0] if return_first_arg and args else None
        if not store.handlers:
            return value

        self._owner._current.append(hook_name)  # noqa: SLF001
        try:
            # Snapshot: handlers added or removed mid-run apply to the next run.
            for handler in tuple(store.handlers):
                result = handler.callback(*args)
                if return_first_arg:
                    value = result
                    args = (result, *args[1:])
        finally:
            self._owner._current.pop()  # noqa: SLF001
        return value

    def runs(self, hook_name: str) -> int:
        store = self._hooks.get(hook_name)
        return store.runs if store else 0


class Hooks:
    """Registry of named filters and actions.

    Memory Optimization:
        Uses __slots__ for memory efficiency (avoids per-instance __dict__).
        Every hook name ever run keeps a small entry for did_filter() and
        did_action(), so the registry grows with the number of distinct
        translation domains looked up.

    Example:
        >>> hooks = Hooks()
        >>> seen = []
        >>> hooks.add_action("hook_added", "spy", lambda name, *_: seen.append(name))
        >>> hooks.add_filter("i18n.gettext", "tests", lambda text, *_: f"[{text}]")
        >>> seen
        ['i18n.gettext']
        >>> hooks.remove_filter("i18n.gettext", "tests")
        1
    """

    __slots__ = ("_actions", "_current", "_filters")

    def __init__(self) -> None:
        """Initialize empty hooks registry."""
        self._filters = _HookRegistry(self)
        self._actions = _HookRegistry(self)
        self._current: list[str] = []

    # Filters

    def add_filter(
        self,
        hook_name: str,
        namespace: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Register a filter callback.

        The callback receives the current value followed by the auxiliary
        arguments passed to apply_filters() and must return the new value.

        Raises:
            HookNameError: If hook_name or namespace is invalid
            TypeError: If callback is not callable or priority not an int
        """
        self._filters.add(hook_name, namespace, callback, priority)

    def remove_filter(self, hook_name: str, namespace: str) -> int:
        """Remove every filter registered under namespace; return the count."""
        return self._filters.remove(hook_name, namespace)

    def remove_all_filters(self, hook_name: str) -> int:
        """Remove every filter on hook_name; return the count."""
        return self._filters.remove(hook_name, None, remove_all=True)

    def has_filter(self, hook_name: str, namespace: str | None = None) -> bool:
        """Check for filters on hook_name, optionally from one namespace."""
        return self._filters.has(hook_name, namespace)

    def apply_filters(self, hook_name: str, value: Any, *args: Any) -> Any:
        """Pass value through every filter on hook_name and return the result."""
        return self._filters.run(hook_name, (value, *args), return_first_arg=True)

    def did_filter(self, hook_name: str) -> int:
        """Number of times hook_name has been applied."""
        return self._filters.runs(hook_name)

    # Actions

    def add_action(
        self,
        hook_name: str,
        namespace: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Register an action callback. See add_filter() for errors."""
        self._actions.add(hook_name, namespace, callback, priority)

    def remove_action(self, hook_name: str, namespace: str) -> int:
        """Remove every action registered under namespace; return the count."""
        return self._actions.remove(hook_name, namespace)

    def remove_all_actions(self, hook_name: str) -> int:
        """Remove every action on hook_name; return the count."""
        return self._actions.remove(hook_name, None, remove_all=True)

    def has_action(self, hook_name: str, namespace: str | None = None) -> bool:
        """Check for actions on hook_name, optionally from one namespace."""
        return self._actions.has(hook_name, namespace)

    def do_action(self, hook_name: str, *args: Any) -> None:
        """Call every action on hook_name with args."""
        self._actions.run(hook_name, args, return_first_arg=False)

    def did_action(self, hook_name: str) -> int:
        """Number of times hook_name has been fired."""
        return self._actions.runs(hook_name)

    # Introspection

    def current_hook(self) -> str | None:
        """Name of the innermost hook currently running, if any."""
        return self._current[-1] if self._current else None

    def doing_hook(self, hook_name: str | None = None) -> bool:
        """Whether hook_name (or any hook, if None) is currently running."""
        if hook_name is None:
            return bool(self._current)
        return hook_name in self._current


# Process-wide registry shared by the default I18n instance.
default_hooks = Hooks()

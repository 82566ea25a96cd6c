"""Translation filter channels.

Every public lookup is passed through two filter channels, in order:

1. the generic channel for its call shape, e.g. ``i18n.ngettext``
2. the domain-specific channel, the generic name plus ``_<domain>``,
   e.g. ``i18n.ngettext_my-plugin``

Both receive the current value followed by the call's original arguments,
with the domain (as the caller passed it, possibly None) last.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable
from typing import Any, TypeAlias

from gettextengine.constants import DEFAULT_DOMAIN
from gettextengine.runtime.hooks import HookCapability

__all__ = ["FilterPipeline", "domain_channel", "make_filter_pipeline"]

FilterPipeline: TypeAlias = Callable[[str, Any, tuple[Any, ...], str | None], Any]
"""(channel, value, call arguments, domain) -> filtered value."""


def domain_channel(channel: str, domain: str | None = None) -> str:
    """Name of the domain-specific filter channel for a generic channel.

    Example:
        >>> domain_channel("i18n.gettext")
        'i18n.gettext_default'
        >>> domain_channel("i18n.has_translation", "my-plugin")
        'i18n.has_translation_my-plugin'
    """
    return f"{channel}_{DEFAULT_DOMAIN if domain is None else domain}"


def _unfiltered(channel: str, value: Any, args: tuple[Any, ...], domain: str | None) -> Any:  # noqa: ARG001
    return value


def make_filter_pipeline(hooks: HookCapability | None) -> FilterPipeline:
    """Build the filter pipeline for a hooks capability.

    Without hooks the pipeline returns values untouched.

    Args:
        hooks: Hooks capability, or None to disable filtering

    Returns:
        Callable applying the generic then the domain-specific channel
    """
    if hooks is None:
        return _unfiltered

    def apply(channel: str, value: Any, args: tuple[Any, ...], domain: str | None) -> Any:
        value = hooks.apply_filters(channel, value, *args, domain)
        return hooks.apply_filters(domain_channel(channel, domain), value, *args, domain)

    return apply

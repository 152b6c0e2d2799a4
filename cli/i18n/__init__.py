"""
cli/i18n/__init__.py - Internationalization (i18n) Module

Translates the CLI's own messages (help intro, error prefixes, summary lines).
English (en) is the default language, with Korean (ko) as an option.
Search output itself (table headers, JSON keys, per-task errors) is never translated
so that scripts consuming it stay stable.

Usage:
    from cli.i18n import t, set_lang

    set_lang("ko")
    print(t("cli.search_summary", total=4, failed=1, timed_out=0))
"""

from __future__ import annotations

import contextlib
from contextvars import ContextVar
from typing import Any

SUPPORTED_LANGS = ("en", "ko")
DEFAULT_LANG = "en"

_current_lang: ContextVar[str] = ContextVar("lang", default=DEFAULT_LANG)


def get_lang() -> str:
    """Get current language from context variable."""
    return _current_lang.get()


def set_lang(lang: str) -> None:
    """Set current language. Unsupported codes fall back to DEFAULT_LANG."""
    if lang not in SUPPORTED_LANGS:
        lang = DEFAULT_LANG
    _current_lang.set(lang)


def t(key: str, lang: str | None = None, **kwargs: Any) -> str:
    """Translate a message key to the current language.

    Args:
        key: Message key in namespace.key format (e.g., "cli.interrupted")
        lang: Optional language override
        **kwargs: Format string arguments for interpolation

    Returns:
        Translated string, or key if translation not found

    Examples:
        >>> t("cli.error_prefix", lang="en")
        "Error"
    """
    from cli.i18n.messages import MESSAGES

    if lang is None or lang not in SUPPORTED_LANGS:
        lang = get_lang() if lang is None else DEFAULT_LANG

    msg_dict = MESSAGES.get(key)
    if msg_dict is None:
        return key

    text = msg_dict.get(lang) or msg_dict.get(DEFAULT_LANG, key)

    if kwargs:
        with contextlib.suppress(KeyError, ValueError):
            text = text.format(**kwargs)

    return text


def get_text(ko: str, en: str, lang: str | None = None) -> str:
    """Get text based on language without using message registry.

    Example:
        >>> get_text("중단됨", "Interrupted", lang="en")
        "Interrupted"
    """
    if lang is None:
        lang = get_lang()
    return ko if lang == "ko" else en


__all__ = [
    "t",
    "get_text",
    "get_lang",
    "set_lang",
    "SUPPORTED_LANGS",
    "DEFAULT_LANG",
]

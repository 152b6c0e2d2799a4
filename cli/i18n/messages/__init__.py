"""
cli/i18n/messages/__init__.py - Message Registry

Aggregates message dictionaries from sub-modules under a namespace prefix.

Structure:
    MESSAGES = {
        "cli.help_intro": {"ko": "...", "en": "..."},
        "cli.error_prefix": {"ko": "...", "en": "..."},
        ...
    }
"""

from __future__ import annotations

from typing import TypedDict


class MessageDict(TypedDict):
    """Message dictionary type."""

    ko: str
    en: str


MESSAGES: dict[str, MessageDict] = {}


def register_messages(namespace: str, messages: dict[str, MessageDict]) -> None:
    """Register messages for a namespace.

    Args:
        namespace: Namespace prefix (e.g., "cli")
        messages: Dictionary of message key -> translations
    """
    for key, value in messages.items():
        MESSAGES[f"{namespace}.{key}"] = value


# register_messages 정의 이후에 import
from cli.i18n.messages.cli_commands import CLI_MESSAGES  # noqa: E402

register_messages("cli", CLI_MESSAGES)

__all__ = ["MESSAGES", "register_messages", "MessageDict"]

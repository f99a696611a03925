"""Identifier sanitisation for generated enum members and type names."""

from __future__ import annotations

import re

from .logging import get_logger

_LOGGER = get_logger("identifiers")

IDENTIFIER_PREFIX = "_"

# Hiragana, Katakana, CJK Unified Ideographs.
_SCRIPT_CHARS = "\u3040-\u309f\u30a0-\u30ff\u4e00-\u9fff"

_INVALID_CHARS = re.compile(rf"[^a-zA-Z0-9_{_SCRIPT_CHARS}]+")
_VALID_START = re.compile(rf"^[a-zA-Z_{_SCRIPT_CHARS}]")
_VALID_IDENTIFIER = re.compile(rf"[a-zA-Z_{_SCRIPT_CHARS}][a-zA-Z0-9_{_SCRIPT_CHARS}]*")

RESERVED_KEYWORDS: frozenset[str] = frozenset(
    {
        "abstract", "as", "base", "bool", "break", "byte", "case", "catch",
        "char", "checked", "class", "const", "continue", "decimal", "default",
        "delegate", "do", "double", "else", "enum", "event", "explicit",
        "extern", "false", "finally", "fixed", "float", "for", "foreach",
        "goto", "if", "implicit", "in", "int", "interface", "internal", "is",
        "lock", "long", "namespace", "new", "null", "object", "operator",
        "out", "override", "params", "private", "protected", "public",
        "readonly", "ref", "return", "sbyte", "sealed", "short", "sizeof",
        "stackalloc", "static", "string", "struct", "switch", "this", "throw",
        "true", "try", "typeof", "uint", "ulong", "unchecked", "unsafe",
        "ushort", "using", "virtual", "void", "volatile", "while",
    }
)


def sanitize(name: str | None) -> str:
    """Return a safe identifier for ``name``, or an empty string when nothing usable remains."""
    if name is None or not name.strip():
        _LOGGER.warning("No identifier name provided.")
        return ""

    name = _INVALID_CHARS.sub("", name.strip())
    if not name:
        _LOGGER.warning("Name became empty after sanitization.")
        return ""

    if not _VALID_START.match(name):
        _LOGGER.debug("'%s' starts with an invalid character; prefixing underscore.", name)
        name = f"{IDENTIFIER_PREFIX}{name}"

    # Applied even when the name was already prefixed above.
    if is_reserved_keyword(name):
        _LOGGER.debug("'%s' is a reserved keyword; prefixing underscore.", name)
        name = f"{IDENTIFIER_PREFIX}{name}"

    return name


def is_reserved_keyword(text: str) -> bool:
    return text in RESERVED_KEYWORDS


def is_valid_identifier(text: str) -> bool:
    """Return True when ``text`` is a bare identifier the generator may emit."""
    return bool(_VALID_IDENTIFIER.fullmatch(text)) and not is_reserved_keyword(text)


def is_valid_qualified_name(text: str) -> bool:
    """Return True for dot-separated identifiers such as ``Game.Audio``."""
    return bool(text) and all(is_valid_identifier(part) for part in text.split("."))


__all__ = [
    "IDENTIFIER_PREFIX",
    "RESERVED_KEYWORDS",
    "is_reserved_keyword",
    "is_valid_identifier",
    "is_valid_qualified_name",
    "sanitize",
]

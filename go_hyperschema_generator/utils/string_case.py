"""
String case conversion utilities for Go client generation.

This module provides identifier formatting with Go naming conventions:
punctuation is removed, words are capitalized, and well-known acronyms
(``ID``, ``URL``, ``UUID``, ...) are upper-cased the way Go code spells them.

The conversions live on :class:`GoIdentifierCase`, which is constructed once
by the generator and handed to whichever component formats identifiers.
"""

import re
from collections.abc import Callable, Iterable
from typing import Final

# Characters that separate words inside schema names
_WORD_DELIMITER_PATTERN: Final = re.compile(r"[-.$/:_{}\s]")

# Suffixes rewritten in upper case when they end a word
DEFAULT_ACRONYMS: Final = (
    "Url",
    "Http",
    "Id",
    "Io",
    "Uuid",
    "Api",
    "Uri",
    "Ssl",
    "Cname",
    "Oauth",
    "Otp",
)

# Acronyms longer than this only get their first two letters upper-cased (Oauth -> OAuth)
_MAX_FULL_UPPER_ACRONYM: Final = 4

# Reserved Go keywords that cannot be used as identifiers
GO_KEYWORDS: Final = frozenset(
    {
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    }
)


def _convert_if_not_empty(string: str | None, conversion_func: Callable[[str], str]) -> str:
    """Safely convert a string, returning empty string if input is None or empty."""
    return conversion_func(string) if string else ""


def capitalcase(string: str | None) -> str:
    """Convert string into capital case (first letter uppercase).

    Args:
        string: String to convert.

    Returns:
        Capital case string.

    Examples:
        >>> capitalcase("hello world")
        'Hello world'
    """

    def _capitalcase(s: str) -> str:
        return s[0].upper() + s[1:]

    return _convert_if_not_empty(string, _capitalcase)


class GoIdentifierCase:
    """Formats schema names into Go identifiers.

    Args:
        acronyms: Word suffixes spelled in upper case once they end a word.
            ``DEFAULT_ACRONYMS`` is used when omitted.
    """

    def __init__(self, acronyms: Iterable[str] | None = None) -> None:
        self.acronyms = tuple(acronyms if acronyms is not None else DEFAULT_ACRONYMS)
        self._acronym_pattern = re.compile(f"({'|'.join(map(re.escape, self.acronyms))})$")

    def depunct(self, ident: str, *, initial_cap: bool) -> str:
        """Remove punctuation from an identifier and camel-case its words.

        Args:
            ident: Name as written in the schema.
            initial_cap: Whether the first word is capitalized as well.

        Returns:
            The camel-cased identifier with acronyms normalized.

        Examples:
            >>> GoIdentifierCase().depunct("provider_id", initial_cap=True)
            'ProviderID'
            >>> GoIdentifierCase().depunct("oauth-client", initial_cap=True)
            'OAuthClient'
        """
        words = _WORD_DELIMITER_PATTERN.split(ident)
        for i, word in enumerate(words):
            if initial_cap or i > 0:
                word = capitalcase(word)
            words[i] = self._acronym_pattern.sub(self._upper_acronym, word)
        return "".join(words)

    @staticmethod
    def _upper_acronym(match: re.Match[str]) -> str:
        acronym = match.group(0)
        if len(acronym) > _MAX_FULL_UPPER_ACRONYM:
            return acronym[:2].upper() + acronym[2:]
        return acronym.upper()

    def initial_cap(self, ident: str) -> str:
        """Exported Go identifier for ``ident`` (``app-identity`` -> ``AppIdentity``)."""
        if not ident:
            msg = "blank identifier"
            raise ValueError(msg)
        return self.depunct(ident, initial_cap=True)

    def initial_low(self, ident: str) -> str:
        """Unexported Go identifier for ``ident`` (``struct-uuid`` -> ``structUUID``)."""
        if not ident:
            msg = "blank identifier"
            raise ValueError(msg)
        return self.depunct(ident, initial_cap=False)

    def method_cap(self, method: str) -> str:
        """Service method name for an HTTP verb (``PATCH`` -> ``Patch``)."""
        return self.initial_cap(method.lower())


def escape_go_keyword(name: str) -> str:
    """Escape Go keywords with a trailing underscore if necessary.

    Args:
        name: The identifier name to check.

    Returns:
        The name with ``_`` appended if it's a Go keyword, otherwise unchanged.

    Examples:
        >>> escape_go_keyword("type")
        'type_'
        >>> escape_go_keyword("name")
        'name'
    """
    return f"{name}_" if is_go_keyword(name) else name


def is_go_keyword(name: str) -> bool:
    """Check if a name is a Go keyword."""
    return name in GO_KEYWORDS

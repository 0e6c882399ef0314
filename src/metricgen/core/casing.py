"""
Identifier casing transforms used by code generation.

Words are split on any non-alphanumeric character and on case boundaries:
a lowercase letter followed by an uppercase one (``fooBar``), and the last
capital of an acronym followed by a lowercase letter (``HTTPServer``).
Digits stay attached to the word they follow.
"""

import re
from typing import List

_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")
_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z0-9]+")


def split_words(text: str) -> List[str]:
    """Split an identifier into its words."""
    words: List[str] = []
    for chunk in _SEPARATORS.split(text):
        if chunk:
            words.extend(_WORD.findall(chunk))
    return words


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def upper_camel(text: str) -> str:
    """Convert an identifier to UpperCamelCase.

    Example:
        >>> upper_camel("browser.engagement")
        'BrowserEngagement'
    """
    return "".join(_capitalize(word) for word in split_words(text))


def lower_camel(text: str) -> str:
    """Convert an identifier to lowerCamelCase.

    Example:
        >>> lower_camel("baseline_count")
        'baselineCount'
    """
    words = split_words(text)
    if not words:
        return ""
    return words[0].lower() + "".join(_capitalize(word) for word in words[1:])

"""
Text Analyzer

Computes the two ranking metrics for a book description:

- uppercase word count: words whose first character is an uppercase letter
- unique word count: distinct words once everything is lowercased

Words are whatever remains after splitting on whitespace and a fixed set
of punctuation characters. Both functions are pure.
"""

import re
from typing import NamedTuple

# Space, tab, newline, carriage return, backslash, hyphen, double quote,
# period, comma, semicolon, colon, exclamation mark, question mark.
WORD_DELIMITERS = re.compile(r'[ \t\n\r\\\-".,;:!?]+')


class TextMetrics(NamedTuple):
    """Metrics for a single description."""

    uppercase_word_count: int
    unique_word_count: int


def tokenize(text: str) -> list[str]:
    """
    Split text into words, dropping empty tokens.

    Examples:
        tokenize("Hello, World!") -> ["Hello", "World"]
        tokenize("well-known \\"fact\\"") -> ["well", "known", "fact"]
    """
    return [token for token in WORD_DELIMITERS.split(text) if token]


def analyze(description: str) -> TextMetrics:
    """
    Compute uppercase and unique word counts for a description.

    Args:
        description: Free text, possibly empty

    Returns:
        TextMetrics; (0, 0) for empty or whitespace-only text
    """
    words = tokenize(description)
    uppercase = sum(1 for word in words if word[0].isupper())
    unique = len({word.lower() for word in words})
    return TextMetrics(uppercase_word_count=uppercase, unique_word_count=unique)

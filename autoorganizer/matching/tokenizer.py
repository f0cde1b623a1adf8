"""
Tokenization of filenames and document text into comparable word sets
"""

import re
import unicodedata
from typing import FrozenSet

TokenSet = FrozenSet[str]

MIN_TOKEN_LENGTH = 2

_FILENAME_SEPARATORS = re.compile(r'[._\-]')
_NON_ALPHANUMERIC = re.compile(r'[\W_]+')


def _is_punctuation(char: str) -> bool:
    return unicodedata.category(char).startswith('P')


def _trim_punctuation(word: str) -> str:
    """Strip Unicode punctuation (categories P*) from both ends; symbols such as $ and + stay"""
    start, end = 0, len(word)
    while start < end and _is_punctuation(word[start]):
        start += 1
    while end > start and _is_punctuation(word[end - 1]):
        end -= 1
    return word[start:end]


def tokenize_filename(name: str) -> TokenSet:
    """
    Tokenize a filename or folder name

    'Chase_Statement-2023.01' -> {'chase', 'statement', '2023', '01'}
    """
    lowered = _FILENAME_SEPARATORS.sub(' ', (name or '').lower())
    return frozenset(
        token for token in _NON_ALPHANUMERIC.split(lowered)
        if len(token) >= MIN_TOKEN_LENGTH
    )


def tokenize_text(text: str) -> TokenSet:
    """
    Tokenize extracted document text

    Splits on whitespace only and trims punctuation from both ends of each
    word, so '03/15/2023' and 'e-statement' survive as single tokens.
    """
    tokens = set()
    for word in (text or '').lower().split():
        token = _trim_punctuation(word)
        if len(token) >= MIN_TOKEN_LENGTH:
            tokens.add(token)
    return frozenset(tokens)

#
# Copyright (c) Contributors to the Open 3D Engine Project.
# For complete copyright and license terms please see the LICENSE at the root of this distribution.
#
# SPDX-License-Identifier: Apache-2.0 OR MIT
#
"""
Identifier case normalization for SimpleGrasshopper

Turns arbitrary field and parameter identifiers into their canonical
Pascal Case form. The canonical name is used as the generated property name
and as the last segment of the persisted setting key.

Usage:
    from identifier_case import to_pascal_case

    to_pascal_case("my_field")             # "MyField"
    to_pascal_case("ABC")                  # "Abc"
    to_pascal_case("ab9cd")                # "Ab9Cd"
    to_pascal_case("ns.my_class.my_field") # "Ns.MyClass.MyField"
"""

import re
from typing import List

# Whitespace as C# defines it: Python's \s without \x1c-\x1f
WHITESPACE = re.compile(r"[^\S\x1c-\x1f]")
INVALID_CHARS = re.compile(r"[^_a-zA-Z0-9]")
STARTS_WITH_LOWER = re.compile(r"^[a-z]")
TRAILING_UPPER_RUN = re.compile(r"(?<=[A-Z])[A-Z0-9]+$")
LOWER_AFTER_DIGIT = re.compile(r"(?<=[0-9])[a-z]")
UPPER_RUN_INSIDE = re.compile(r"(?<=[A-Z])[A-Z]+?(?=[A-Z][a-z]|[0-9])")


def to_pascal_case(text: str) -> str:
    """
    Convert an identifier to its canonical Pascal Case form.

    Dot separated segments (namespace qualified names) are converted
    independently and joined back with dots. Never raises; an empty string
    yields an empty string.

    Args:
        text: Any identifier, possibly containing whitespace, underscores,
            digits and punctuation

    Returns:
        The canonical name, made of letters and digits plus the input's dots
    """
    return ".".join(_segment_to_pascal_case(segment) for segment in text.split("."))


def is_pascal_case(text: str) -> bool:
    """Check whether an identifier is already in its canonical form."""
    return to_pascal_case(text) == text


def split_words(text: str) -> List[str]:
    """Split a single segment into raw words, dropping invalid characters."""
    cleaned = INVALID_CHARS.sub("", WHITESPACE.sub("_", text))
    return [word for word in cleaned.split("_") if word]


def normalize_word(word: str) -> str:
    """Apply the per-word case passes in order."""
    # Head: "field" -> "Field"
    word = STARTS_WITH_LOWER.sub(lambda m: m.group(0).upper(), word)
    # Trailing caps run: "ABC" -> "Abc", "MyURL" -> "MyUrl"
    word = TRAILING_UPPER_RUN.sub(lambda m: m.group(0).lower(), word)
    # Digit boundary: "Ab9cd" -> "Ab9Cd"
    word = LOWER_AFTER_DIGIT.sub(lambda m: m.group(0).upper(), word)
    # Inner caps run, last capital kept: "ABCDef" -> "AbcDef"
    return UPPER_RUN_INSIDE.sub(lambda m: m.group(0).lower(), word)


def _segment_to_pascal_case(segment: str) -> str:
    return "".join(normalize_word(word) for word in split_words(segment))

"""
String and string-list helpers.
"""

from typing import List, Tuple


def string_in_slice(value: str, items: List[str]) -> Tuple[int, bool]:
    """Return the index of value in items and whether it was found."""
    for i, item in enumerate(items):
        if item == value:
            return i, True
    return -1, False


def string_in_slice_case_insensitive(value: str, items: List[str]) -> Tuple[int, bool]:
    """Same as string_in_slice, regardless of case."""
    value = value.lower()
    for i, item in enumerate(items):
        if item.lower() == value:
            return i, True
    return -1, False


def case_insensitive_contains(s: str, substr: str) -> bool:
    return substr.lower() in s.lower()


def remove_duplicates(options: List[str], *others_to_clean: str) -> List[str]:
    """Return options without duplicates, empty strings or any of others_to_clean.

    Order of first occurrences is kept; the input list is left untouched.
    """
    found = set(others_to_clean)
    cleaned = []
    for option in options:
        if option and option not in found:
            found.add(option)
            cleaned.append(option)
    return cleaned

"""
Pattern matching used by path search and quick selection.

Three modes are supported, chosen by how the pattern is quoted:

- ``'text'`` matches any candidate containing ``text``
- ``"text"`` matches only a candidate equal to ``text``
- an unquoted pattern matches when its characters appear in the candidate
  in the same order, not necessarily next to each other
"""

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")


def _quoted(pattern: str, quote: str) -> bool:
    return len(pattern) >= 2 and pattern.startswith(quote) and pattern.endswith(quote)


def matches(pattern: str, candidate: str) -> bool:
    """
    Test a pattern against a candidate string.

    Params:
        pattern: Quoted substring/exact pattern or unquoted subsequence pattern
        candidate: String being searched

    Returns:
        True if the candidate satisfies the pattern

    Examples:
        matches("'cd'", "abcde") -> True
        matches('"abc"', "abcd") -> False
        matches("ace", "abcde") -> True
        matches("aec", "abcde") -> False
    """
    if _quoted(pattern, "'"):
        return pattern[1:-1] in candidate
    if _quoted(pattern, '"'):
        return candidate == pattern[1:-1]

    look = 0
    for char in candidate:
        if look == len(pattern):
            break
        if char == pattern[look]:
            look += 1
    return look == len(pattern)


def single(candidates: Iterable[T], predicate: Callable[[T], bool]) -> T | None:
    """
    Return the only candidate satisfying predicate.

    None is returned both when nothing matches and when several candidates
    match; callers that need to tell these apart must count matches themselves.

    Params:
        candidates: Values to test
        predicate: Selection test

    Returns:
        The unique matching value, or None
    """
    found: list[T] = []
    for candidate in candidates:
        if predicate(candidate):
            found.append(candidate)
            if len(found) > 1:
                return None
    return found[0] if found else None

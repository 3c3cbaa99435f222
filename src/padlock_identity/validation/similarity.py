"""Cheap string similarity used by the password rules."""


def similarity_ratio(candidate: str, attribute: str) -> float:
    """Return a measure of how much two strings overlap, in [0, 1].

    With ``T`` the total number of characters in both strings and ``M`` the
    number of matches, the ratio is ``2 * M / T``: 1.0 for identical strings,
    0.0 for strings with no character in common.

    Matching is greedy over character multisets: every character of
    ``attribute`` consumes at most one still-unmatched occurrence in
    ``candidate``. Order is ignored, so anagrams score 1.0 and the ratio is
    never lower than what an edit-distance metric would report for the same
    pair. Comparison is case-sensitive.

    Examples
    --------
    >>> similarity_ratio("abc", "abc")
    1.0
    >>> similarity_ratio("abc", "cba")
    1.0
    >>> similarity_ratio("abcd", "xyab")
    0.5
    """
    total = len(candidate) + len(attribute)
    if total == 0:
        return 0.0

    remaining = list(candidate)
    matches = 0
    for char in attribute:
        try:
            remaining.remove(char)
        except ValueError:
            continue
        matches += 1

    return 2.0 * matches / total

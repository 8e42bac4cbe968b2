"""Split an input line into whitespace-delimited tokens.

There is no quoting or escaping: a token is simply a maximal run of
non-whitespace characters.  The first token is the command keyword.
"""

NO_COMMAND = ""
"""Sentinel keyword produced for an empty or all-whitespace line."""


def tokenize(line: str) -> list[str]:
    """Return the tokens of *line*.

    An empty or all-whitespace line yields ``[NO_COMMAND]`` so that
    callers can always read ``tokens[0]`` as the keyword.

    Args:
        line: A raw input line.

    Returns:
        A non-empty list of tokens.

    """
    return line.split() or [NO_COMMAND]

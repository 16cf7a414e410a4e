"""
Solution Parser Module - Extract a binary solution string from freeform text.

Answers to a puzzle often arrive wrapped in reasoning, code fences and
line breaks. The parser recovers the '0'/'1' solution so it can be
restored into a store as a player solution and checked.
"""

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

# Shortest string accepted as a solution (a 5x5 puzzle)
MIN_SOLUTION_LENGTH = 25

# Binary digits with any whitespace between them
_SPACED_BINARY = re.compile(r"(?:[01]\s*){%d,}" % MIN_SOLUTION_LENGTH)

# Unbroken binary digits
_CONTINUOUS_BINARY = re.compile(r"[01]{%d,}" % MIN_SOLUTION_LENGTH)

_WHITESPACE = re.compile(r"\s")


def parse_solution(raw_output: str) -> Optional[str]:
    """
    Extract a binary solution string from raw text.

    Tries two strategies:
    1. Runs of binary digits with whitespace in between (rows on separate
       lines, groups separated by spaces), whitespace removed
    2. All whitespace removed first, then unbroken binary runs

    The longest candidate wins; on a tie the earliest one is kept.

    Args:
        raw_output: Text containing the solution

    Returns:
        The solution string, or None if no run of at least
        MIN_SOLUTION_LENGTH digits is found
    """
    if not raw_output:
        return None

    candidates = [_WHITESPACE.sub("", match) for match in _SPACED_BINARY.findall(raw_output)]
    if candidates:
        longest = max(candidates, key=len)
        if len(longest) >= MIN_SOLUTION_LENGTH:
            logger.debug(f"Parsed {len(longest)}-cell solution from spaced digits")
            return longest

    cleaned = _WHITESPACE.sub("", raw_output)
    continuous = _CONTINUOUS_BINARY.findall(cleaned)
    if continuous:
        longest = max(continuous, key=len)
        logger.debug(f"Parsed {len(longest)}-cell solution from continuous digits")
        return longest

    logger.debug("No solution found in output")
    return None

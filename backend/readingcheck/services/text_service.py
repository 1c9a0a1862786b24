import re
from typing import List

_WHITESPACE = re.compile(r"\s+")

def normalize(text: str) -> List[str]:
    """
    Lower-cases text and splits it into words on runs of whitespace.

    Used for both the target phrase and the attempt transcript, so word positions
    on both sides are comparable. Punctuation stays attached to its word.
    """
    return [token for token in _WHITESPACE.split(text.lower()) if token]

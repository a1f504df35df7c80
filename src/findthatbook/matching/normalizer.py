# ABOUTME: Lossy text canonicalization used by every title and author comparison.
# ABOUTME: Lower-cases, drops punctuation, and optionally removes English function words.

import re

# Anything that is not a word character or whitespace; underscore is punctuation here.
_PUNCTUATION_RE = re.compile(r"[^\w\s]|_")

# Articles and "of" carry no identifying weight in a title ("The Lord of the Rings").
_FUNCTION_WORDS = frozenset({"the", "a", "an", "of"})


def normalize(text: str | None) -> str:
    """Canonicalize free text for comparison.

    Lower-cases, removes every character that is neither alphanumeric nor
    whitespace, and trims the ends. None or empty input yields "".
    Idempotent: normalize(normalize(s)) == normalize(s).
    """
    if not text:
        return ""
    return _PUNCTUATION_RE.sub("", text.lower()).strip()


def strip_function_words(text: str | None) -> str:
    """Normalize text, then drop the words "the", "a", "an" and "of".

    Remaining words are rejoined with single spaces, so "The Adventures of
    Huckleberry Finn" becomes "adventures huckleberry finn".
    """
    words = normalize(text).split()
    return " ".join(word for word in words if word not in _FUNCTION_WORDS)

"""Split article text into word tokens."""

import re

_PUNCTUATION = re.compile(r"[,.;:\"'?!\-—–()«»\[\]/|]")
# "2020-05-01T10:00" -> "2020 05 01 T10 00"
_DATETIME_T = re.compile(r"(?<=\d)T(?=\d)")


def tokenize(text: str, min_word_size: int = 1) -> list[str]:
    """Replace punctuation with spaces and split on whitespace.

    Case is preserved; folding is left to the stages that need it.
    """
    text = _DATETIME_T.sub(" T", text)
    text = _PUNCTUATION.sub(" ", text)
    return [word for word in text.split() if len(word) >= min_word_size]

"""Split text into chunks that fit a token budget.

Tokens are counted with the GPT-2 byte-pair encoding from tiktoken. The
encoding is byte-level, so one character can span several tokens; chunks are
only cut between characters.
"""

import logging
from functools import lru_cache
from itertools import accumulate

import tiktoken

logger = logging.getLogger(__name__)

ENCODING_NAME = "gpt2"


@lru_cache(maxsize=1)
def _get_encoding() -> tiktoken.Encoding:
    return tiktoken.get_encoding(ENCODING_NAME)


def _ends_character(data: bytes, offset: int) -> bool:
    """True if ``offset`` is not inside a multi-byte UTF-8 sequence."""
    return offset >= len(data) or (data[offset] & 0xC0) != 0x80


def count_tokens(text: str) -> int:
    """Number of tokens in ``text``."""
    return len(_get_encoding().encode(text))


def split_string(text: str, max_tokens: int) -> list[str]:
    """Split ``text`` into consecutive chunks of at most ``max_tokens`` tokens.

    Joining the chunks gives back ``text``. A chunk boundary that would fall
    inside a character is moved back to the start of that character; a single
    character needing more than ``max_tokens`` tokens becomes its own chunk.

    Raises:
        ValueError: If max_tokens is not positive
    """
    if max_tokens <= 0:
        raise ValueError(f"max_tokens must be positive, got {max_tokens}")
    if not text:
        return []

    encoding = _get_encoding()
    tokens = encoding.encode(text)
    pieces = [encoding.decode_single_token_bytes(token) for token in tokens]
    data = b"".join(pieces)
    # ends[i] is the byte offset right after token i
    ends = list(accumulate(len(piece) for piece in pieces))

    chunks = []
    start = 0
    while start < len(tokens):
        stop = min(start + max_tokens, len(tokens))
        while stop > start and not _ends_character(data, ends[stop - 1]):
            stop -= 1
        if stop == start:
            stop = start + max_tokens
            while not _ends_character(data, ends[stop - 1]):
                stop += 1

        begin = ends[start - 1] if start else 0
        chunks.append(data[begin : ends[stop - 1]].decode("utf-8"))
        start = stop

    logger.debug(f"Split {len(tokens)} tokens into {len(chunks)} chunks")
    return chunks

"""Tagged-block location and removal in model replies."""

import re
from typing import NamedTuple

from spatial_tracker.prompts import SPATIAL_TAG_CLOSE, SPATIAL_TAG_OPEN


def _block_pattern(open_tag: str, close_tag: str) -> re.Pattern[str]:
    return re.compile(re.escape(open_tag) + r"(.*?)" + re.escape(close_tag), re.DOTALL)


SPATIAL_BLOCK_RE = _block_pattern(SPATIAL_TAG_OPEN, SPATIAL_TAG_CLOSE)


class Block(NamedTuple):
    """First tagged block in a reply.

    `content` is the trimmed text between the tags; `start`/`end` span the
    whole block including both tags.
    """

    content: str
    start: int
    end: int


def find_block(
    text: str,
    open_tag: str = SPATIAL_TAG_OPEN,
    close_tag: str = SPATIAL_TAG_CLOSE,
) -> Block | None:
    """Locate the first OPEN ... CLOSE pair in document order.

    Non-greedy and spans line breaks, so the block ends at the first close tag
    after the open tag. Only the leftmost match is ever considered; any later
    blocks are ignored. Returns None when there is no complete pair.
    """
    if (open_tag, close_tag) == (SPATIAL_TAG_OPEN, SPATIAL_TAG_CLOSE):
        pattern = SPATIAL_BLOCK_RE
    else:
        pattern = _block_pattern(open_tag, close_tag)
    match = pattern.search(text)
    if match is None:
        return None
    return Block(content=match.group(1).strip(), start=match.start(), end=match.end())


def remove_block(text: str, block: Block) -> str:
    """Cut the block out of the reply and trim the result."""
    return (text[:block.start] + text[block.end:]).strip()

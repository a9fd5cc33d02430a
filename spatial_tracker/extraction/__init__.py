"""Reply extraction: locate the tagged block, then parse its packet.

Wire format, appended by the model at the end of its reply:

  <spatial_system>
  {"characters": [{"name": "Bob", "x": 5, "y": 0, "status": "Walking"}]}
  </spatial_system>

Only the first block counts. Content must be strict JSON; x/y may be numbers
or numeric strings.
"""

from .blocks import Block, find_block, remove_block  # noqa: F401
from .parser import (  # noqa: F401
    ParseResult,
    SnapshotParseError,
    decode_snapshot,
    parse_snapshot,
)

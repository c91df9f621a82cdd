"""
Intcode VM - Program Text Loader

Program text is a single line of comma-separated base-10 integers, e.g.

    1,9,10,3,2,3,11,0,99,30,40,50

Whitespace around tokens and a trailing newline are tolerated. There is
no header, length prefix or checksum.
"""

import logging
import re
from typing import List

from .config import CELL_MIN, CELL_MAX
from .errors import MalformedProgram

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r'[+-]?[0-9]+')


def parse_program(text: str) -> List[int]:
    """Parse program text into a list of cells.

    Raises MalformedProgram on an empty program, a non-integer token, or a
    token outside the signed 64-bit range.
    """
    text = text.strip()
    if not text:
        raise MalformedProgram("Program text is empty")

    cells = []
    for index, token in enumerate(text.split(',')):
        token = token.strip()
        if not _TOKEN_RE.fullmatch(token):
            raise MalformedProgram("not a base-10 integer", token, index)
        value = int(token)
        if not CELL_MIN <= value <= CELL_MAX:
            raise MalformedProgram("does not fit in a 64-bit cell", token, index)
        cells.append(value)

    logger.debug("Parsed program: %d cells", len(cells))
    return cells

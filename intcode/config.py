"""
Intcode VM - Configuration Constants
====================================

Machine limits and logging defaults shared by the VM and the icvm driver.
Drivers override the logging values through setup_logging() arguments or
icvm command-line flags; the machine limits are fixed.
"""

import logging


# =============================================================================
#  CELL RANGE (signed 64-bit)
# =============================================================================
CELL_BITS = 64
CELL_MIN = -(1 << (CELL_BITS - 1))
CELL_MAX = (1 << (CELL_BITS - 1)) - 1


# =============================================================================
#  INSTRUCTION ENCODING
# =============================================================================
OPCODE_RADIX = 100        # opcode = low two decimal digits
MODE_RADIX = 10           # one decimal digit per parameter mode


# =============================================================================
#  PATCH ADDRESSES (noun/verb fixups used by gravity-assist style programs)
# =============================================================================
NOUN_ADDRESS = 1
VERB_ADDRESS = 2
RESULT_ADDRESS = 0
DEFAULT_SEARCH_MAX = 99


# =============================================================================
#  LOGGING
# =============================================================================
LOGGER_NAME = "intcode"
DEFAULT_LEVEL = logging.DEBUG
DEFAULT_CONSOLE_LEVEL = logging.WARNING
LOG_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
)
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

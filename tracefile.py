# tracefile.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class Operation(Enum):
    LOAD = "l"
    STORE = "s"


def parse_trace_line(line):
    """
    Parse "<op> <hex-address> [<ignored>]" into (Operation, address).
    Returns None for blank or malformed lines; they are never an error.
    """
    fields = line.split()
    if not 2 <= len(fields) <= 3:
        return None
    try:
        operation = Operation(fields[0])
        address = int(fields[1], 16)
    except ValueError:
        return None
    if address < 0:
        return None
    return operation, address & 0xFFFFFFFF


def read_trace(stream):
    for lineno, line in enumerate(stream, 1):
        record = parse_trace_line(line)
        if record is None:
            if line.strip():
                logger.debug("skipping malformed trace line %d: %r", lineno, line.rstrip())
            continue
        yield record


def format_trace_line(operation, address):
    return "{} {:08x} 0".format(operation.value, address)

import logging
from datetime import datetime

from dateutil import parser as dtp

logger = logging.getLogger(__name__)

# NCSA access log time, e.g. 10/Oct/2000:13:55:36 -0700
NCSA_FORMAT = "%d/%b/%Y:%H:%M:%S %z"


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Best-effort parse of a log timestamp.

    Returns None instead of raising, so a bad timestamp never costs the
    rest of the record.
    """
    if not value:
        return None
    value = value.strip()
    try:
        return datetime.strptime(value, NCSA_FORMAT)
    except ValueError:
        pass
    try:
        return dtp.parse(value)
    except (ValueError, OverflowError) as e:
        logger.debug("Unparsable timestamp %r: %s", value, e)
        return None

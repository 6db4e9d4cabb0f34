import datetime
import re
import time
from typing import Optional

# captured on first import, which happens during process startup
_PROCESS_START = time.monotonic()

_URL_CREDENTIALS = re.compile(r"//.*@")


def get_process_uptime() -> float:
    """Seconds elapsed since the process started."""
    return time.monotonic() - _PROCESS_START


def utc_timestamp(now: Optional[datetime.datetime] = None) -> str:
    """
    ISO-8601 UTC timestamp with millisecond precision and a `Z` suffix.

    e.g. 2024-05-01T12:30:00.123Z
    """
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    else:
        now = now.astimezone(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def mask_url_credentials(url: str) -> str:
    """Hide the user:password part of a broker URL so it can be logged."""
    return _URL_CREDENTIALS.sub("//***:***@", url)

import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current time as a naive UTC datetime (the form pymongo hands back)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with offset, for API responses."""
    return datetime.now(timezone.utc).isoformat()


def parse_github_timestamp(value) -> datetime | None:
    """
    Parse a GitHub API timestamp to naive UTC.

    Handles:
    - ISO string with timezone (e.g., "2024-01-01T00:00:00Z")
    - datetime object with or without timezone
    - None or invalid -> None
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    if isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Failed to parse datetime string: {value}")
            return None
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
        return dt

    logger.warning(f"Unexpected datetime type: {type(value)}")
    return None

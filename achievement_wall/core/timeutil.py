from datetime import datetime, timedelta, timezone

# Timestamps are recorded in a fixed UTC+8 offset
LOCAL_TZ = timezone(timedelta(hours=8))


def local_now() -> datetime:
    """Current UTC+8 wall-clock time, second precision, without tzinfo."""
    return datetime.now(LOCAL_TZ).replace(tzinfo=None, microsecond=0)

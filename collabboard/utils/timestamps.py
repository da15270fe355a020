from datetime import datetime, timezone


def utcnow() -> datetime:
    """Microsecond creation stamp; SQLite's ``CURRENT_TIMESTAMP`` only resolves to the second."""
    return datetime.now(timezone.utc)

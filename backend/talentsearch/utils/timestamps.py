from datetime import datetime, timezone


def utc_now() -> str:
    # Microsecond precision keeps lexical order equal to creation order
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")

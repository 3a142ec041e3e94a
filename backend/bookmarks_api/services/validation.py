"""
Field checks for bookmark payloads.

Each check returns a FieldError or None; validate_bookmark_fields collects
them in field order. A value is empty when it is None or "" (whitespace-only
strings are accepted).
"""

from typing import List, Optional

from bookmarks_api.services.results import FieldError

TITLE_REQUIRED = "Title is required"
URL_REQUIRED = "URL is required"


def check_not_empty(field: str, value: Optional[str], message: str) -> Optional[FieldError]:
    if value is None or value == "":
        return FieldError(field=field, message=message)
    return None


def validate_bookmark_fields(title: Optional[str], url: Optional[str]) -> List[FieldError]:
    checks = (
        check_not_empty("title", title, TITLE_REQUIRED),
        check_not_empty("url", url, URL_REQUIRED),
    )
    return [error for error in checks if error is not None]

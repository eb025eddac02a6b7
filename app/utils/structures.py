"""
Response envelope and display helpers shared by the API views
"""
import re
from datetime import date

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class Status:
    OK = "OK"
    ERROR = "ERROR"


def resp(status: Status = "OK", data: dict | list | str | None = None) -> dict:
    """
    Standard application response
    """
    if data is None:
        data = {}
    if status == Status.OK:
        return {"status": status, "data": data}
    else:
        return {"status": status, "message": data}


def humanize_enum(value: str) -> str:
    """GUN_THREAT -> Gun Threat"""
    return value.replace("_", " ").title()


def parse_iso_date(value: str) -> date:
    """
    Strict YYYY-MM-DD parser. Raises ValueError for anything else,
    including well-formed strings naming a day that does not exist.
    """
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValueError(f"invalid date format: {value!r}")
    return date.fromisoformat(value)

"""Syslog line parser.

Lines are matched against an ordered list of patterns, strictest first;
the first pattern that matches decides which fields are extracted. A line
that matches nothing becomes a bare message.
"""

import re
from dataclasses import dataclass
from datetime import UTC, datetime

MONTHS = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}

# [TZ ]Mon DD HH:MM:SS[.mmm]; the millisecond group is not used
_TIMESTAMP = (
    r"(?:[A-Z]{2,5} )?"
    r"(?P<month>[A-Z][a-z]{2}) {1,2}(?P<day>\d{1,2}) "
    r"(?P<time>\d{2}:\d{2}:\d{2})(?:\.\d{3})?"
)

SYSLOG_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    (
        "kernel",
        re.compile(
            rf"^{_TIMESTAMP} (?:(?P<host>[^\s\[<]+) )?<?(?P<process>kernel)>?:? (?P<message>.*)$"
        ),
    ),
    (
        "full",
        re.compile(
            rf"^{_TIMESTAMP} (?:(?P<host>[^\s\[]+) )?(?P<process>[^\[]+)\[(?P<pid>\d+)\]: (?P<message>.*)$"
        ),
    ),
    (
        "timestamp",
        re.compile(rf"^{_TIMESTAMP} (?P<message>.*)$"),
    ),
]


@dataclass
class SyslogEntry:
    """Fields extracted from one syslog line."""

    message: str
    timestamp: str | None = None
    host: str | None = None
    process: str | None = None
    pid: int | None = None
    pattern: str = "fallback"


def infer_syslog_timestamp(
    month: str,
    day: int | str,
    time: str,
    now: datetime | None = None,
) -> str | None:
    """Attach a year to a syslog month/day/time.

    The current year is used unless the month lies after the current
    month, in which case the line is taken to be from last year.

    Args:
        month: Three-letter month abbreviation
        day: Day of month
        time: HH:MM:SS
        now: Reference time (defaults to the current UTC time)

    Returns:
        ``YYYY-MM-DDTHH:MM:SS`` or None if the date does not exist
    """
    if now is None:
        now = datetime.now(UTC)

    month_number = MONTHS.get(month)
    if month_number is None:
        return None

    year = now.year
    if month_number > now.month:
        year -= 1

    try:
        hour, minute, second = (int(part) for part in time.split(":"))
        parsed = datetime(year, month_number, int(day), hour, minute, second)
    except ValueError:
        return None

    return parsed.strftime("%Y-%m-%dT%H:%M:%S")


def parse_syslog_line(line: str, now: datetime | None = None) -> SyslogEntry:
    """Split a syslog line into timestamp, host, process, pid and message.

    Args:
        line: Raw syslog line
        now: Reference time for year inference

    Returns:
        SyslogEntry; never raises
    """
    line = line.rstrip("\r\n")

    for name, pattern in SYSLOG_PATTERNS:
        match = pattern.match(line)
        if match is None:
            continue

        fields = match.groupdict()
        pid = fields.get("pid")
        process = fields.get("process")
        return SyslogEntry(
            message=fields["message"],
            timestamp=infer_syslog_timestamp(
                fields["month"], fields["day"], fields["time"], now
            ),
            host=fields.get("host"),
            process=process.strip() if process else None,
            pid=int(pid) if pid is not None else None,
            pattern=name,
        )

    return SyslogEntry(message=line)

"""Pure recurrence logic - no I/O dependencies.

Rule grammar (case-sensitive):

    ""          one-shot task, never recurs
    "d <n>"     every n days, 1 <= n <= 400
    "y"         every year on the anchor's month/day
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum

from .errors import TaskError

DATE_FORMAT = "%Y%m%d"
MAX_INTERVAL_DAYS = 400
MAX_INTEGER_DIGITS = 18


class RecurrenceError(TaskError):
    """Base class for date and rule errors raised by the recurrence engine."""

    pass


class MissingRule(RecurrenceError):
    """Raised when a next date is requested without a rule."""

    pass


class InvalidDateFormat(RecurrenceError):
    """Raised when a date is not a valid YYYYMMDD string."""

    pass


class UnsupportedRuleFormat(RecurrenceError):
    """Raised when a daily rule is not exactly 'd <integer>'."""

    pass


class InvalidDayCount(RecurrenceError):
    """Raised when a daily interval is outside 1..400."""

    pass


class InvalidRule(RecurrenceError):
    """Raised when a rule is neither daily nor yearly."""

    pass


class RuleKind(Enum):
    """Kind of recurrence rule."""

    NONE = "none"
    DAILY = "daily"
    YEARLY = "yearly"


def parse_date(value: str) -> date:
    """Parse a YYYYMMDD string. Raises InvalidDateFormat."""
    if len(value) != 8 or not value.isascii() or not value.isdigit():
        raise InvalidDateFormat(f"Invalid date format: {value!r}")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise InvalidDateFormat(f"Invalid date format: {value!r}") from None


def format_date(value: date) -> str:
    """Format a date as YYYYMMDD."""
    return value.strftime(DATE_FORMAT)


def add_year(value: date) -> date:
    """One calendar year later. Feb 29 rolls over to Mar 1 in non-leap years."""
    try:
        return value.replace(year=value.year + 1)
    except ValueError:
        return date(value.year + 1, 3, 1)


def _is_integer(token: str) -> bool:
    """Signed decimal that fits a 64-bit integer."""
    digits = token[1:] if token[:1] in ("+", "-") else token
    return digits.isascii() and digits.isdigit() and len(digits) <= MAX_INTEGER_DIGITS


@dataclass(frozen=True)
class RecurrenceRule:
    """A parsed repeat rule."""

    kind: RuleKind
    interval_days: int = 0

    @property
    def is_none(self) -> bool:
        return self.kind is RuleKind.NONE

    @classmethod
    def parse(cls, text: str) -> "RecurrenceRule":
        """
        Parse a repeat string.

        Raises UnsupportedRuleFormat, InvalidDayCount or InvalidRule for
        anything outside the grammar. The empty string is the NONE rule.
        """
        if text == "":
            return cls(RuleKind.NONE)

        tokens = text.split(" ")
        match tokens[0]:
            case "d":
                if len(tokens) != 2 or not _is_integer(tokens[1]):
                    raise UnsupportedRuleFormat(f"Unsupported repeat rule format: {text[:32]!r}")
                days = int(tokens[1])
                if not 1 <= days <= MAX_INTERVAL_DAYS:
                    raise InvalidDayCount(
                        f"Day interval must be between 1 and {MAX_INTERVAL_DAYS}, got {days}"
                    )
                return cls(RuleKind.DAILY, days)
            case "y" if len(tokens) == 1:
                return cls(RuleKind.YEARLY)
            case _:
                raise InvalidRule(f"Invalid repeat rule: {text!r}")

    def advance(self, anchor: date, now: datetime) -> date:
        """
        First occurrence after `now`, stepping forward from `anchor`.

        Always takes at least one step, even when the anchor is already in
        the future.

        Daily rules compare against now truncated to its calendar day; yearly
        rules compare the occurrence's midnight against now untruncated. For
        naive local datetimes both land on the same day. The asymmetry is
        kept on purpose because clients observe it.
        """
        try:
            return self._advance(anchor, now)
        except (ValueError, OverflowError):
            raise InvalidDateFormat(f"Next date after {format_date(anchor)} is past year 9999") from None

    def _advance(self, anchor: date, now: datetime) -> date:
        match self.kind:
            case RuleKind.DAILY:
                elapsed = (now.date() - anchor).days
                steps = max(1, elapsed // self.interval_days + 1)
                return anchor + timedelta(days=steps * self.interval_days)
            case RuleKind.YEARLY:
                # Mar 1 rollover makes the step non-uniform, so walk it.
                current = add_year(anchor)
                while datetime.combine(current, time()) <= now:
                    current = add_year(current)
                return current
            case _:
                raise MissingRule("No repeat rule given")


def parse_rule(text: str) -> RecurrenceRule:
    """Parse a repeat string into a RecurrenceRule."""
    return RecurrenceRule.parse(text)


def next_date(now: datetime, anchor_date: str, rule: str) -> str:
    """
    Next occurrence of `rule` strictly after `now`, starting from `anchor_date`.

    Pure function - no I/O. Raises a RecurrenceError subclass on any bad input.
    """
    if rule == "":
        raise MissingRule("No repeat rule given")
    anchor = parse_date(anchor_date)
    return format_date(parse_rule(rule).advance(anchor, now))

"""Value types mirroring the java.time classes as their serialisation handles."""

from dataclasses import dataclass, field

__all__ = [
    "Duration",
    "Instant",
    "LocalDate",
    "LocalDateTime",
    "LocalTime",
    "MonthDay",
    "OffsetDateTime",
    "OffsetTime",
    "Period",
    "Year",
    "YearMonth",
    "ZoneOffset",
    "ZonedDateTime",
]

_HANDLE_PREFIX = "com.alibaba.com.caucho.hessian.io.java8."


def _wire(name: str, **kwargs):
    """A dataclass field that carries its on-the-wire Java field name."""
    return field(metadata={"hessian": name}, **kwargs)


@dataclass
class Duration:
    """A java.time.Duration: seconds plus nanoseconds."""

    seconds: int = _wire("seconds", default=0)
    nanos: int = _wire("nanos", default=0)

    def java_class_name(self) -> str:
        return _HANDLE_PREFIX + "DurationHandle"


@dataclass
class Instant:
    """A java.time.Instant: seconds plus nanoseconds since the epoch."""

    seconds: int = _wire("seconds", default=0)
    nanos: int = _wire("nanos", default=0)

    def java_class_name(self) -> str:
        return _HANDLE_PREFIX + "InstantHandle"


@dataclass
class LocalDate:
    """A java.time.LocalDate."""

    year: int = _wire("year", default=0)
    month: int = _wire("month", default=0)
    day: int = _wire("day", default=0)

    def java_class_name(self) -> str:
        return _HANDLE_PREFIX + "LocalDateHandle"


@dataclass
class LocalTime:
    """A java.time.LocalTime."""

    hour: int = _wire("hour", default=0)
    minute: int = _wire("minute", default=0)
    second: int = _wire("second", default=0)
    nano: int = _wire("nano", default=0)

    def java_class_name(self) -> str:
        return _HANDLE_PREFIX + "LocalTimeHandle"


@dataclass
class LocalDateTime:
    """A java.time.LocalDateTime: a date and a time of day."""

    date: LocalDate = _wire("date", default_factory=LocalDate)
    time: LocalTime = _wire("time", default_factory=LocalTime)

    def java_class_name(self) -> str:
        return _HANDLE_PREFIX + "LocalDateTimeHandle"


@dataclass
class MonthDay:
    """A java.time.MonthDay."""

    month: int = _wire("month", default=0)
    day: int = _wire("day", default=0)

    def java_class_name(self) -> str:
        return _HANDLE_PREFIX + "MonthDayHandle"


@dataclass
class ZoneOffset:
    """A java.time.ZoneOffset, in seconds east of UTC."""

    seconds: int = _wire("seconds", default=0)

    def java_class_name(self) -> str:
        return _HANDLE_PREFIX + "ZoneOffsetHandle"


@dataclass
class OffsetDateTime:
    """A java.time.OffsetDateTime."""

    date_time: LocalDateTime = _wire("dateTime", default_factory=LocalDateTime)
    offset: ZoneOffset = _wire("offset", default_factory=ZoneOffset)

    def java_class_name(self) -> str:
        return _HANDLE_PREFIX + "OffsetDateTimeHandle"


@dataclass
class OffsetTime:
    """A java.time.OffsetTime."""

    local_time: LocalTime = _wire("localTime", default_factory=LocalTime)
    zone_offset: ZoneOffset = _wire("zoneOffset", default_factory=ZoneOffset)

    def java_class_name(self) -> str:
        return _HANDLE_PREFIX + "OffsetTimeHandle"


@dataclass
class Period:
    """A java.time.Period."""

    days: int = _wire("days", default=0)
    months: int = _wire("months", default=0)
    years: int = _wire("years", default=0)

    def java_class_name(self) -> str:
        return _HANDLE_PREFIX + "PeriodHandle"


@dataclass
class Year:
    """A java.time.Year."""

    year: int = _wire("year", default=0)

    def java_class_name(self) -> str:
        return _HANDLE_PREFIX + "YearHandle"


@dataclass
class YearMonth:
    """A java.time.YearMonth."""

    month: int = _wire("month", default=0)
    year: int = _wire("year", default=0)

    def java_class_name(self) -> str:
        return _HANDLE_PREFIX + "YearMonthHandle"


@dataclass
class ZonedDateTime:
    """A java.time.ZonedDateTime."""

    date_time: LocalDateTime = _wire("dateTime", default_factory=LocalDateTime)
    offset: ZoneOffset = _wire("offset", default_factory=ZoneOffset)
    zone_id: str = _wire("zoneId", default="")

    def java_class_name(self) -> str:
        return _HANDLE_PREFIX + "ZonedDateTimeHandle"
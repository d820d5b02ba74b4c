from datetime import date, datetime, time, timedelta, timezone, tzinfo
from dateutil import tz
from backend.common.constants import DEFAULT_MENTOR_TIMEZONE, TIME_OF_DAY_FORMAT
from backend.common.mentorship_enums import Weekday


class DateTimeUtil:
    def __init__(self, logger):
        self.logger = logger

    def resolve_timezone(self, zone_name: str | None) -> tzinfo:
        """
        Resolve an IANA zone name, falling back to UTC.

        Args:
            zone_name: Zone name such as "America/New_York", or None.

        Returns:
            A tzinfo for the zone, or UTC when the name is empty or unknown.
        """
        zone = tz.gettz(zone_name or DEFAULT_MENTOR_TIMEZONE)
        if zone is None:
            self.logger.warning(
                "[DateTimeUtil] unknown timezone %s, falling back to UTC", zone_name
            )
            return timezone.utc
        return zone

    def to_zone(self, dt: datetime, zone: tzinfo) -> datetime:
        """Convert a datetime into the given zone. Naive datetimes are taken as UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(zone)

    def weekday_and_time(self, dt: datetime, zone: tzinfo) -> tuple[Weekday, str]:
        """
        Derive the weekday and the HH:MM time of day of a datetime in a zone.

        Args:
            dt: The datetime to inspect.
            zone: The zone the weekday and time are read in.

        Returns:
            tuple[Weekday, str]: e.g. (Weekday.MONDAY, "09:00").
        """
        local = self.to_zone(dt, zone)
        return Weekday.from_index(local.weekday()), local.strftime(TIME_OF_DAY_FORMAT)

    def utc_day_bounds(self, day: date, zone: tzinfo) -> tuple[datetime, datetime]:
        """
        Return the UTC instants bounding a calendar day in a zone.

        Args:
            day: The calendar date.
            zone: The zone the date is interpreted in.

        Returns:
            tuple[datetime, datetime]: Inclusive start and exclusive end, in UTC.
        """
        start = datetime.combine(day, time.min, tzinfo=zone)
        end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)
        return start.astimezone(timezone.utc), end.astimezone(timezone.utc)

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)

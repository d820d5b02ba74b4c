from enum import Enum


class SessionStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SessionAction(str, Enum):
    START = "start"
    COMPLETE = "complete"
    CANCEL = "cancel"
    UPDATE = "update"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_index(cls, weekday: int) -> "Weekday":
        """Map datetime.weekday() (Monday == 0) to a Weekday."""
        return list(cls)[weekday]

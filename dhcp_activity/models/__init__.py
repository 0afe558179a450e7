from .log_record import FieldValue, LogRecord
from .reservation import AddressState, Reservation, Scope
from .activity import ActivityResult, ReportRow, NO_ACTIVITY_FOUND, NO_DATE_FOUND

__all__ = [
    "FieldValue",
    "LogRecord",
    "AddressState",
    "Reservation",
    "Scope",
    "ActivityResult",
    "ReportRow",
    "NO_ACTIVITY_FOUND",
    "NO_DATE_FOUND",
]

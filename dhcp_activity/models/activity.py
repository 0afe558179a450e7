from datetime import date
from typing import Optional, Union

from pydantic import BaseModel

from .log_record import LogRecord

NO_ACTIVITY_FOUND = "no activity found"
NO_DATE_FOUND = "no date found"


class ActivityResult(BaseModel):
    counter: str  # "n/total"
    client_name: Optional[str] = None
    ip_address: str
    scope_id: str
    server_name: str
    mac_address: str
    last_activity: Optional[LogRecord] = None
    online: Optional[bool] = None  # None — проверить не удалось
    lease_state: str


class ReportRow(BaseModel):
    counter: str
    client_name: Optional[str] = None
    ip_address: str
    scope_id: str
    server_name: str
    mac_address: str
    lease_state: str
    online: Optional[bool] = None
    last_activity_date: Union[date, str]
    last_activity_time: Optional[str] = None
    last_event: Optional[str] = None

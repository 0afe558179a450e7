import datetime as dt
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Колонки аудит-лога Windows DHCP -> поля LogRecord
COLUMN_MAP = {
    "ID": "event_id",
    "Date": "date",
    "Time": "time",
    "Description": "description",
    "IP Address": "ip_address",
    "Host Name": "host_name",
    "MAC Address": "mac_address",
}

DATE_FORMATS = ("%m/%d/%y", "%m/%d/%Y", "%Y-%m-%d")


class FieldValue(BaseModel):
    """Результат обращения к полю записи: значение есть или его нет."""

    model_config = ConfigDict(frozen=True)

    value: Optional[str] = None
    is_present: bool = False

    @classmethod
    def present(cls, value: str) -> "FieldValue":
        return cls(value=value, is_present=True)

    @classmethod
    def missing(cls) -> "FieldValue":
        return cls()


class LogRecord(BaseModel):
    """
    Одна строка аудит-лога DHCP.
    None — колонки нет в файле (или строка обрезана), "" — колонка есть, но пустая.
    """

    model_config = ConfigDict(frozen=True)

    event_id: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    description: Optional[str] = None
    ip_address: Optional[str] = None
    host_name: Optional[str] = None
    mac_address: Optional[str] = None
    extra: Dict[str, Optional[str]] = Field(default_factory=dict)

    source_file: Optional[str] = None
    line_number: Optional[int] = None

    @classmethod
    def from_row(cls, row: Dict[str, object], source_file: Optional[str] = None,
                 line_number: Optional[int] = None) -> "LogRecord":
        named = {}
        extra = {}
        for key, value in row.items():
            if key is None:
                # лишние ячейки DictReader складывает списком под ключом None
                extra["_overflow"] = ",".join(value) if value else ""
                continue
            column = key.strip()
            if isinstance(value, str):
                value = value.strip()
            if column in COLUMN_MAP:
                named[COLUMN_MAP[column]] = value
            else:
                extra[column] = value
        return cls(**named, extra=extra, source_file=source_file, line_number=line_number)

    def field(self, name: str) -> FieldValue:
        if name in COLUMN_MAP:
            name = COLUMN_MAP[name]
        if name in COLUMN_MAP.values():
            value = getattr(self, name)
        else:
            value = self.extra.get(name)
        if value is None:
            return FieldValue.missing()
        return FieldValue.present(value)

    def parsed_date(self) -> Optional[dt.date]:
        raw = self.field("date")
        if not raw.is_present or not raw.value:
            return None
        for fmt in DATE_FORMATS:
            try:
                return dt.datetime.strptime(raw.value, fmt).date()
            except ValueError:
                continue
        return None

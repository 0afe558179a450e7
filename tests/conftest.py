import os
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from loguru import logger

from dhcp_activity.errors import HostApiError
from dhcp_activity.models import Reservation, Scope

LOG_COLUMNS = (
    "ID,Date,Time,Description,IP Address,Host Name,MAC Address,User Name, TransactionID,"
    " QResult,Probationtime, CorrelationID,Dhcid,VendorClass(Hex),VendorClass(ASCII),"
    "UserClass(Hex),UserClass(ASCII),RelayAgentInformation,DnsRegError."
)


def make_banner(lines: int = 32) -> List[str]:
    banner = ["\t\tMicrosoft DHCP Service Activity Log", ""]
    while len(banner) < lines:
        banner.append(f"Event ID  Meaning {len(banner)}")
    return banner[:lines]


def log_row(event_id="10", date="10/18/26", time_="08:15:02", description="Assign",
            ip="10.0.0.5", host="pc1.corp.local", mac="AABBCCDDEEFF") -> str:
    return f"{event_id},{date},{time_},{description},{ip},{host},{mac},,12345,0,,,,,,,,,0"


def write_audit_log(directory: Path, name: str, rows: List[str], mtime: Optional[float] = None,
                    columns: str = LOG_COLUMNS, header_lines: int = 32) -> Path:
    path = directory / name
    lines = make_banner(header_lines) + [columns] + rows
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


class FakeHost:
    def __init__(self, scopes: List[Scope], reservations: Dict[str, List[Reservation]],
                 log_directory: Optional[str] = None, fail: bool = False):
        self.scopes = scopes
        self.reservations = reservations
        self.log_directory = log_directory
        self.fail = fail

    def list_scopes(self):
        if self.fail:
            raise HostApiError("DHCP Server service is not running")
        return list(self.scopes)

    def list_reservations(self, scope_id):
        return list(self.reservations.get(scope_id, []))

    def get_audit_log_directory(self):
        return self.log_directory


class FakeProbe:
    def __init__(self, online: Optional[Dict[str, object]] = None):
        self.online = online or {}
        self.calls: List[str] = []

    def __call__(self, ip):
        self.calls.append(ip)
        value = self.online.get(ip, True)
        if isinstance(value, Exception):
            raise value
        return value


def make_reservation(ip, mac, name=None, scope_id="10.0.0.0", state="ActiveReservation"):
    return Reservation(
        name=name or f"host-{ip.rsplit('.', 1)[-1]}",
        ip_address=ip,
        scope_id=scope_id,
        client_id=mac,
        address_state=state,
    )


@pytest.fixture
def now():
    return time.time()


@pytest.fixture
def sample_host():
    scope = Scope(scope_id="10.0.0.0", name="Office")
    reservations = [
        make_reservation("10.0.0.5", "aa-bb-cc-dd-ee-ff", name="printer"),
        make_reservation("10.0.0.6", "11-22-33-44-55-66", name="nas", state="InactiveReservation"),
        make_reservation("10.0.0.7", "de-ad-be-ef-00-01", name="camera"),
    ]
    return FakeHost([scope], {"10.0.0.0": reservations})


@pytest.fixture
def log_messages():
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")


def warnings_of(records) -> List[str]:
    return [r["message"] for r in records if r["level"].name == "WARNING"]

import pathlib

from conftest import LOG_COLUMNS, log_row, make_banner, warnings_of, write_audit_log

from dhcp_activity.collectors import discover_log_files, ingest, resolve_log_directory
from dhcp_activity.errors import HostApiError
from dhcp_activity.parsers import parse_audit_log


def test_parse_audit_log_skips_banner_and_reads_named_fields(tmp_path: pathlib.Path):
    path = write_audit_log(tmp_path, "DhcpSrvLog-Mon.log", [
        log_row(),
        log_row(event_id="11", description="Renew", mac="001122334455", date="10/19/26"),
    ])

    records = parse_audit_log(path)

    assert len(records) == 2
    first = records[0]
    assert first.event_id == "10"
    assert first.date == "10/18/26"
    assert first.time == "08:15:02"
    assert first.description == "Assign"
    assert first.ip_address == "10.0.0.5"
    assert first.host_name == "pc1.corp.local"
    assert first.mac_address == "AABBCCDDEEFF"
    assert first.extra["TransactionID"] == "12345"
    assert first.source_file == "DhcpSrvLog-Mon.log"
    assert first.line_number == 34
    assert records[1].description == "Renew"


def test_parse_audit_log_with_only_banner_yields_nothing(tmp_path: pathlib.Path):
    path = tmp_path / "DhcpSrvLog-Tue.log"
    path.write_text("\n".join(make_banner(32)) + "\n", encoding="utf-8")

    assert parse_audit_log(path) == []


def test_parse_audit_log_with_header_row_only_yields_nothing(tmp_path: pathlib.Path):
    path = write_audit_log(tmp_path, "DhcpSrvLog-Tue.log", [])

    assert parse_audit_log(path) == []


def test_short_row_gets_missing_fields(tmp_path: pathlib.Path):
    path = write_audit_log(tmp_path, "DhcpSrvLog-Mon.log", ["00,10/18/26,08:00:00,Started"])

    (record,) = parse_audit_log(path)

    assert record.description == "Started"
    assert record.mac_address is None
    assert not record.field("MAC Address").is_present


def test_ingest_empty_directory(tmp_path: pathlib.Path):
    assert list(ingest(tmp_path)) == []


def test_ingest_missing_directory_warns(tmp_path: pathlib.Path, log_messages):
    assert list(ingest(tmp_path / "nope")) == []
    assert any("nope" in m for m in warnings_of(log_messages))


def test_discover_skips_empty_and_foreign_files(tmp_path: pathlib.Path, now):
    write_audit_log(tmp_path, "DhcpSrvLog-Mon.log", [log_row()], mtime=now - 100)
    (tmp_path / "DhcpSrvLog-Tue.log").write_bytes(b"")
    write_audit_log(tmp_path, "DhcpV6SrvLog-Mon.log", [log_row()])
    write_audit_log(tmp_path, "notes.txt", [log_row()])

    files = discover_log_files(tmp_path)

    assert [f.name for f in files] == ["DhcpSrvLog-Mon.log"]


def test_discover_orders_by_modification_time(tmp_path: pathlib.Path, now):
    write_audit_log(tmp_path, "DhcpSrvLog-Mon.log", [log_row()], mtime=now - 10)
    write_audit_log(tmp_path, "DhcpSrvLog-Sat.log", [log_row()], mtime=now - 300)
    write_audit_log(tmp_path, "DhcpSrvLog-Sun.log", [log_row()], mtime=now - 200)

    files = discover_log_files(tmp_path)

    assert [f.name for f in files] == ["DhcpSrvLog-Sat.log", "DhcpSrvLog-Sun.log", "DhcpSrvLog-Mon.log"]


def test_discover_honours_retention_window(tmp_path: pathlib.Path, now):
    write_audit_log(tmp_path, "DhcpSrvLog-Mon.log", [log_row()], mtime=now - 60)
    write_audit_log(tmp_path, "DhcpSrvLog-Tue.log", [log_row()], mtime=now - 9 * 86400)

    assert [f.name for f in discover_log_files(tmp_path, retention_days=7)] == ["DhcpSrvLog-Mon.log"]
    assert len(discover_log_files(tmp_path, retention_days=0)) == 2


def test_zero_byte_file_is_never_opened(tmp_path: pathlib.Path, monkeypatch):
    (tmp_path / "DhcpSrvLog-Wed.log").write_bytes(b"")
    opened = []
    import dhcp_activity.collectors.audit_log_collector as collector

    monkeypatch.setattr(collector, "parse_audit_log", lambda path, **kw: opened.append(path) or [])

    assert list(ingest(tmp_path)) == []
    assert opened == []


def test_ingest_concatenates_files_in_time_order(tmp_path: pathlib.Path, now):
    write_audit_log(tmp_path, "DhcpSrvLog-Mon.log", [log_row(description="newer")], mtime=now - 10)
    write_audit_log(tmp_path, "DhcpSrvLog-Sun.log", [
        log_row(description="older-1"),
        log_row(description="older-2"),
    ], mtime=now - 1000)

    records = list(ingest(tmp_path))

    assert [r.description for r in records] == ["older-1", "older-2", "newer"]


def test_ingest_skips_broken_file_and_continues(tmp_path: pathlib.Path, now, log_messages):
    write_audit_log(tmp_path, "DhcpSrvLog-Sun.log", [
        log_row(),
        '10,10/18/26,"08:15"x,Assign,10.0.0.9,pc9,AABBCCDDEE99,,1,0,,,,,,,,,0',
    ], mtime=now - 1000)
    write_audit_log(tmp_path, "DhcpSrvLog-Mon.log", [log_row(description="ok")], mtime=now - 10)

    records = list(ingest(tmp_path))

    assert [r.description for r in records] == ["ok"]
    warnings = warnings_of(log_messages)
    assert len(warnings) == 1
    assert "DhcpSrvLog-Sun.log" in warnings[0]


def test_ingest_custom_header_length(tmp_path: pathlib.Path):
    write_audit_log(tmp_path, "DhcpSrvLog-Mon.log", [log_row()], header_lines=5)

    records = list(ingest(tmp_path, header_lines=5))

    assert len(records) == 1
    assert records[0].mac_address == "AABBCCDDEEFF"


def test_ingest_is_lazy(tmp_path: pathlib.Path):
    write_audit_log(tmp_path, "DhcpSrvLog-Mon.log", [log_row()])

    records = ingest(tmp_path)

    assert next(records).event_id == "10"
    assert list(records) == []
    assert len(list(ingest(tmp_path))) == 1


def test_resolve_log_directory_uses_host_answer(tmp_path: pathlib.Path):
    class Host:
        def get_audit_log_directory(self):
            return str(tmp_path)

    assert resolve_log_directory(Host(), fallback="C:/fallback") == tmp_path


def test_resolve_log_directory_falls_back(log_messages):
    class FailingHost:
        def get_audit_log_directory(self):
            raise HostApiError("access denied")

    assert resolve_log_directory(FailingHost(), fallback="C:/fallback") == pathlib.Path("C:/fallback")
    assert resolve_log_directory(object(), fallback="C:/fallback") == pathlib.Path("C:/fallback")
    assert len(warnings_of(log_messages)) == 2


def test_log_columns_fixture_matches_windows_header():
    assert LOG_COLUMNS.startswith("ID,Date,Time,Description,IP Address,Host Name,MAC Address")

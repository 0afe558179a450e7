from .audit_log_collector import discover_log_files, ingest, resolve_log_directory
from .ping import PingProbe, no_probe
from .win_dhcp_collector import LocalPowerShell, WinDhcpHost, WinRMPowerShell, build_host

__all__ = [
    "discover_log_files",
    "ingest",
    "resolve_log_directory",
    "PingProbe",
    "no_probe",
    "LocalPowerShell",
    "WinDhcpHost",
    "WinRMPowerShell",
    "build_host",
]

from .audit_log import parse_audit_log
from .dhcp import parse_audit_log_path, parse_ps_list, parse_reservations, parse_scopes

__all__ = [
    "parse_audit_log",
    "parse_audit_log_path",
    "parse_ps_list",
    "parse_reservations",
    "parse_scopes",
]

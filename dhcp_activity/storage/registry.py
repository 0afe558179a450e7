from typing import Callable, Dict, List

sink_registry: Dict[str, Callable] = {}


def register_sink(name: str, sink_func: Callable):
    sink_registry[name] = sink_func


def get_sink(name: str) -> Callable | None:
    return sink_registry.get(name)


def available_sinks() -> List[str]:
    return sorted(sink_registry)


# Заголовок колонки -> поле ReportRow
REPORT_COLUMNS = [
    ("Counter", "counter"),
    ("Name", "client_name"),
    ("IPAddress", "ip_address"),
    ("ScopeId", "scope_id"),
    ("Server", "server_name"),
    ("MacAddress", "mac_address"),
    ("LeaseState", "lease_state"),
    ("Online", "online"),
    ("LastActivityDate", "last_activity_date"),
]


def format_value(value) -> str:
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def format_online(online) -> str:
    if online is None:
        return "unknown"
    return "True" if online else "False"


def row_values(row) -> List[str]:
    values = []
    for _, attr in REPORT_COLUMNS:
        value = getattr(row, attr)
        values.append(format_online(value) if attr == "online" else format_value(value))
    return values

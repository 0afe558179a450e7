from .reservation_activity import build_index, collect_reservations, find_last_activity, project, report

__all__ = ["build_index", "collect_reservations", "find_last_activity", "project", "report"]

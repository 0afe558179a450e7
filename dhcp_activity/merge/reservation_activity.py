from typing import Callable, Dict, Iterable, List, Optional, Sequence

from loguru import logger

from dhcp_activity.models import (
    NO_ACTIVITY_FOUND,
    NO_DATE_FOUND,
    ActivityResult,
    LogRecord,
    Reservation,
    ReportRow,
    Scope,
)
from dhcp_activity.normalizer import normalize_mac

Probe = Callable[[str], Optional[bool]]


def collect_reservations(host, scopes: Sequence[Scope]) -> Dict[str, List[Reservation]]:
    """Резервации по всем scope. Ошибки сервера (HostApiError) не глушим — без них отчёта нет."""
    reservations_by_scope: Dict[str, List[Reservation]] = {}
    for scope in scopes:
        reservations_by_scope[scope.scope_id] = list(host.list_reservations(scope.scope_id))
    return reservations_by_scope


def has_mac_column(records: Sequence[LogRecord]) -> bool:
    return any(record.field("mac_address").is_present for record in records)


def find_last_activity(records: Sequence[LogRecord], mac_key: str) -> Optional[LogRecord]:
    """Последняя по порядку чтения запись с этим MAC (свежий файл, последняя строка)."""
    if not mac_key:
        return None
    for record in reversed(records):
        mac = record.field("mac_address")
        if mac.is_present and normalize_mac(mac.value) == mac_key:
            return record
    return None


def build_index(records: Iterable[LogRecord]) -> Dict[str, LogRecord]:
    """MAC -> последняя запись за один проход; выбор тот же, что у find_last_activity."""
    index: Dict[str, LogRecord] = {}
    for record in records:
        mac = record.field("mac_address")
        if mac.is_present and mac.value:
            index[normalize_mac(mac.value)] = record
    return index


def _probe(probe: Probe, ip: str) -> Optional[bool]:
    try:
        return probe(ip)
    except Exception as e:
        logger.warning(f"[PING] Проверка {ip} не удалась: {e}")
        return False


def report(
    scopes: Sequence[Scope],
    reservations_by_scope: Dict[str, Sequence[Reservation]],
    logs: Iterable[LogRecord],
    probe: Probe,
    server_name: str,
    indexed: bool = False,
) -> List[ActivityResult]:
    """
    Сводка по каждой резервации:
    - порядок — как отдал сервер: scope, затем резервации внутри scope
    - последняя активность — последняя запись лога с тем же MAC (по порядку чтения, не по времени)
    - online — одна проверка ping, ошибка = False
    - если в логах вообще нет колонки MAC — одно предупреждение и "нет активности" для всех
    """
    records = list(logs)

    correlate = True
    if records and not has_mac_column(records):
        logger.warning("[REPORT] В логах нет колонки MAC Address — сопоставление с резервациями отключено")
        correlate = False

    index = build_index(records) if correlate and indexed else None

    total = sum(len(reservations_by_scope.get(scope.scope_id, ())) for scope in scopes)
    logger.debug(f"[REPORT] Резерваций всего: {total}, записей логов: {len(records)}")

    results: List[ActivityResult] = []
    counter = 0
    for scope in scopes:
        for reservation in reservations_by_scope.get(scope.scope_id, ()):
            counter += 1
            mac_key = normalize_mac(reservation.client_id)

            last_activity = None
            if correlate:
                if index is not None:
                    last_activity = index.get(mac_key)
                else:
                    last_activity = find_last_activity(records, mac_key)

            online = _probe(probe, reservation.ip_address)
            logger.debug(
                f"[REPORT] {counter}/{total} {reservation.ip_address} ({reservation.name}): "
                f"online={online}, активность={'есть' if last_activity else 'нет'}"
            )

            results.append(ActivityResult(
                counter=f"{counter}/{total}",
                client_name=reservation.name,
                ip_address=reservation.ip_address,
                scope_id=reservation.scope_id,
                server_name=server_name,
                mac_address=reservation.client_id,
                last_activity=last_activity,
                online=online,
                lease_state=reservation.lease_state,
            ))

    return results


def last_activity_date(result: ActivityResult):
    if result.last_activity is None:
        return NO_ACTIVITY_FOUND
    parsed = result.last_activity.parsed_date()
    if parsed is None:
        return NO_DATE_FOUND
    return parsed


def project(results: Iterable[ActivityResult]) -> List[ReportRow]:
    """Сырые результаты -> строки для вывода: запись лога заменяется датой последней активности."""
    rows: List[ReportRow] = []
    for result in results:
        record = result.last_activity
        rows.append(ReportRow(
            counter=result.counter,
            client_name=result.client_name,
            ip_address=result.ip_address,
            scope_id=result.scope_id,
            server_name=result.server_name,
            mac_address=result.mac_address,
            lease_state=result.lease_state,
            online=result.online,
            last_activity_date=last_activity_date(result),
            last_activity_time=record.time if record else None,
            last_event=record.description if record else None,
        ))
    return rows

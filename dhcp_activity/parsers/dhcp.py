from typing import Dict, List, Optional

from loguru import logger
from pydantic import ValidationError

from dhcp_activity.models import AddressState, Reservation, Scope


def parse_ps_list(raw_text: str) -> List[Dict[str, str]]:
    """
    Разбирает вывод PowerShell `Format-List` на блоки "Key : Value".
    Блоки разделены пустыми строками; длинные значения PowerShell
    переносит на следующую строку с отступом — такие строки приклеиваем к предыдущему ключу.
    """
    entries: List[Dict[str, str]] = []
    current_entry: Dict[str, str] = {}
    last_key: Optional[str] = None

    for raw_line in raw_text.splitlines():
        line = raw_line.strip()
        if not line:
            if current_entry:
                entries.append(current_entry)
            current_entry = {}
            last_key = None
            continue

        if " : " in line or line.endswith(" :"):
            key, _, value = line.partition(" :")
            last_key = key.strip()
            current_entry[last_key] = value.strip()
        elif last_key and raw_line[:1].isspace():
            current_entry[last_key] += " " + line

    # Не забудем последнюю запись
    if current_entry:
        entries.append(current_entry)

    return entries


def parse_scopes(raw_text: str) -> List[Scope]:
    scopes: List[Scope] = []
    for entry in parse_ps_list(raw_text):
        scope_id = entry.get("ScopeId")
        if not scope_id:
            continue
        scopes.append(Scope(
            scope_id=scope_id,
            name=entry.get("Name") or None,
            state=entry.get("State") or None,
        ))

    logger.debug(f"[DHCP PARSER] Спарсено scope: {len(scopes)}")
    return scopes


def parse_reservations(raw_text: str, scope_id: str) -> List[Reservation]:
    reservations: List[Reservation] = []
    for entry in parse_ps_list(raw_text):
        ip = entry.get("IPAddress")
        client_id = entry.get("ClientId")
        if not ip or not client_id:
            logger.warning(f"[DHCP PARSER] Пропущена запись без IPAddress/ClientId: {entry}")
            continue

        state = entry.get("AddressState") or AddressState.UNKNOWN.value
        try:
            reservations.append(Reservation(
                name=entry.get("Name") or None,
                ip_address=ip,
                scope_id=entry.get("ScopeId") or scope_id,
                client_id=client_id,
                address_state=state,
                description=entry.get("Description") or None,
                type=entry.get("Type") or None,
            ))
        except ValidationError as e:
            logger.warning(f"[DHCP PARSER] Пропущена резервация {ip}: {e}")

    logger.debug(f"[DHCP PARSER] Спарсено резерваций в {scope_id}: {len(reservations)}")
    return reservations


def parse_audit_log_path(raw_text: str) -> Optional[str]:
    for entry in parse_ps_list(raw_text):
        path = entry.get("Path")
        if path:
            return path
    return None

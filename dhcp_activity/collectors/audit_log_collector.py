import csv
import time
from pathlib import Path
from typing import Iterator, List, Optional

from loguru import logger

from dhcp_activity.config import FALLBACK_LOG_DIRECTORY
from dhcp_activity.errors import HostApiError
from dhcp_activity.models import LogRecord
from dhcp_activity.parsers.audit_log import DEFAULT_HEADER_LINES, parse_audit_log

DEFAULT_PATTERN = "DhcpSrvLog-*.log"


def resolve_log_directory(host=None, fallback: str = FALLBACK_LOG_DIRECTORY) -> Path:
    """
    Путь к аудит-логам берём у DHCP-сервера (Get-DhcpServerAuditLog).
    Если сервер не умеет или не ответил — стандартная папка Windows.
    """
    getter = getattr(host, "get_audit_log_directory", None)
    if getter is None:
        logger.warning(f"[LOG] Путь к аудит-логам узнать не у кого — используем {fallback}")
        return Path(fallback)

    try:
        directory = getter()
    except HostApiError as e:
        logger.warning(f"[LOG] Не удалось получить путь к аудит-логам: {e}. Используем {fallback}")
        return Path(fallback)

    if not directory:
        logger.warning(f"[LOG] Сервер не вернул путь к аудит-логам — используем {fallback}")
        return Path(fallback)

    return Path(directory)


def discover_log_files(log_directory: Path, pattern: str = DEFAULT_PATTERN,
                       retention_days: int = 0) -> List[Path]:
    """
    Непустые файлы логов по шаблону имени, от старых к новым (по mtime).
    retention_days > 0 отсекает файлы старше окна хранения.
    """
    log_directory = Path(log_directory)
    if not log_directory.is_dir():
        logger.warning(f"[LOG] Папка с логами не найдена: {log_directory}")
        return []

    cutoff = time.time() - retention_days * 86400 if retention_days > 0 else None

    files = []
    for path in log_directory.glob(pattern):
        try:
            stat = path.stat()
        except OSError as e:
            logger.warning(f"[LOG] Не удалось прочитать атрибуты {path.name}: {e}")
            continue
        if not path.is_file() or stat.st_size == 0:
            continue
        if cutoff is not None and stat.st_mtime < cutoff:
            logger.debug(f"[LOG] {path.name} старше {retention_days} дн. — пропускаем")
            continue
        files.append((stat.st_mtime, path.name, path))

    files.sort()
    return [path for _, _, path in files]


def ingest(log_directory: Path, pattern: str = DEFAULT_PATTERN,
           header_lines: int = DEFAULT_HEADER_LINES, retention_days: int = 0,
           encoding: str = "utf-8", files: Optional[List[Path]] = None) -> Iterator[LogRecord]:
    """
    Ленивая последовательность записей всех логов в хронологическом порядке файлов.
    Битый файл пропускается с предупреждением, остальные читаются дальше.
    """
    if files is None:
        files = discover_log_files(log_directory, pattern, retention_days)
    logger.debug(f"[LOG] Файлов логов к разбору: {len(files)}")

    for path in files:
        try:
            records = parse_audit_log(path, header_lines=header_lines, encoding=encoding)
        except (OSError, UnicodeError, csv.Error) as e:
            logger.warning(f"[LOG] Не удалось разобрать {path.name}: {e} — файл пропущен")
            continue

        logger.debug(f"[LOG] {path.name}: записей {len(records)}")
        yield from records

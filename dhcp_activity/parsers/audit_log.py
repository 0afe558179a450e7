import csv
from pathlib import Path
from typing import List

from dhcp_activity.models import LogRecord

# В логах Windows DHCP перед CSV идёт текстовая шапка с описанием кодов событий
DEFAULT_HEADER_LINES = 32


def parse_audit_log(path: Path, header_lines: int = DEFAULT_HEADER_LINES,
                    encoding: str = "utf-8") -> List[LogRecord]:
    """
    Читает один файл аудит-лога целиком и возвращает его записи.
    Первые header_lines строк отбрасываются, следующая строка — заголовок CSV.
    Исключения чтения/разбора пробрасываются: решение о пропуске файла принимает вызывающий.
    """
    path = Path(path)
    with open(path, "r", encoding=encoding, errors="replace", newline="") as f:
        lines = f.read().splitlines()

    if len(lines) <= header_lines:
        return []

    reader = csv.DictReader(lines[header_lines:], restval=None, strict=True)
    records: List[LogRecord] = []
    for row in reader:
        if not any(v for k, v in row.items() if k is not None):
            continue  # пустая строка в конце файла
        records.append(LogRecord.from_row(
            row,
            source_file=path.name,
            line_number=header_lines + reader.line_num,
        ))

    return records

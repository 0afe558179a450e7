import time
from pathlib import Path
from typing import List, Optional

import click
from loguru import logger

from dhcp_activity.collectors import PingProbe, build_host, ingest, no_probe, resolve_log_directory
from dhcp_activity.config import Settings, load_settings
from dhcp_activity.errors import DhcpActivityError
from dhcp_activity.logger import setup_logger
from dhcp_activity.merge import collect_reservations, project, report
from dhcp_activity.models import ReportRow
from dhcp_activity.storage import available_sinks, get_sink


def run_pipeline(settings: Settings, host, probe) -> List[ReportRow]:
    """
    Полный проход: scope и резервации с сервера -> аудит-логи -> сопоставление -> строки отчёта.
    Резервации собираем до чтения логов: если сервер не ответил, отчёта не будет вовсе.
    """
    scopes = host.list_scopes()
    logger.debug(f"[DHCP] Scope: {len(scopes)}")
    reservations_by_scope = collect_reservations(host, scopes)

    if settings.log_directory:
        log_directory = Path(settings.log_directory)
    else:
        log_directory = resolve_log_directory(host, settings.fallback_log_directory)
    logger.debug(f"[LOG] Папка аудит-логов: {log_directory}")

    logs = ingest(
        log_directory,
        pattern=settings.log_pattern,
        header_lines=settings.header_lines,
        retention_days=settings.retention_days,
        encoding=settings.log_encoding,
    )

    results = report(
        scopes,
        reservations_by_scope,
        logs,
        probe=probe,
        server_name=settings.server_name,
        indexed=settings.indexed_lookup,
    )
    return project(results)


@click.command(name="dhcp-activity")
@click.option("-v", "--verbose", is_flag=True, help="Подробная хроника работы в stderr.")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="YAML с настройками (по умолчанию config/settings.yaml).")
@click.option("--output", type=click.Choice(available_sinks()), default=None,
              help="Формат вывода.")
@click.option("--output-file", default=None, help="Куда сохранить отчёт (CSV/JSON).")
@click.option("--no-ping", is_flag=True, help="Не проверять доступность адресов.")
@click.option("--indexed", is_flag=True, help="Искать по индексу MAC вместо полного просмотра логов.")
def main(verbose: bool, config_path: Optional[Path], output: Optional[str],
         output_file: Optional[str], no_ping: bool, indexed: bool):
    """
    Последняя активность по каждой DHCP-резервации по аудит-логам сервера и ping.

    Ответ на ping не гарантирует, что отвечает именно зарезервированное устройство:
    MAC не проверяется, адрес InactiveReservation может занимать другой хост.
    """
    setup_logger(verbose)
    start_time = time.time()

    overrides = {
        "output": output,
        "output_file": output_file,
        "ping_enabled": False if no_ping else None,
        "indexed_lookup": True if indexed else None,
    }

    try:
        settings = load_settings(config_path, overrides)
        host = build_host(settings)
        probe = PingProbe(settings.ping_timeout) if settings.ping_enabled else no_probe
        rows = run_pipeline(settings, host, probe)
    except DhcpActivityError as e:
        logger.error(f"[DHCP] {e}")
        raise click.ClickException(str(e)) from e

    try:
        get_sink(settings.output)(rows, output_file=settings.output_file)
    except OSError as e:
        logger.error(f"[REPORT] Не удалось сохранить отчёт: {e}")
        raise click.ClickException(f"Не удалось сохранить отчёт: {e}") from e

    logger.debug(f"[REPORT] Готово за {time.time() - start_time:.2f} с")

import socket
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from dhcp_activity.errors import ConfigError

DEFAULT_CONFIG_PATH = Path("config/settings.yaml")
FALLBACK_LOG_DIRECTORY = r"C:\Windows\System32\dhcp"


class Settings(BaseModel):
    server_name: str = Field(default_factory=socket.gethostname)
    transport: Literal["local", "winrm"] = "local"
    winrm_endpoint: str = "http://localhost:5985/wsman"

    # Явный путь к логам; если пусто — спрашиваем у DHCP-сервера
    log_directory: Optional[str] = None
    fallback_log_directory: str = FALLBACK_LOG_DIRECTORY
    log_pattern: str = "DhcpSrvLog-*.log"
    header_lines: int = Field(32, ge=0)
    retention_days: int = Field(0, ge=0)  # 0 — читаем все файлы, >0 — только свежее N дней
    log_encoding: str = "utf-8"

    ping_enabled: bool = True
    ping_timeout: float = Field(1.0, gt=0)

    # Индекс MAC -> запись вместо линейного поиска по логам на каждую резервацию
    indexed_lookup: bool = False

    output: Literal["table", "csv", "json"] = "table"
    output_file: Optional[str] = None

    @field_validator("server_name")
    @classmethod
    def strip_server_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("server_name не может быть пустым")
        return v


def load_settings(path: Optional[Path] = None, overrides: Optional[Dict[str, Any]] = None) -> Settings:
    """
    Собирает настройки: значения по умолчанию <- YAML-файл <- параметры CLI.
    Учётные данные WinRM в YAML не хранятся, только в окружении / .env.
    """
    load_dotenv()

    path = Path(path) if path else DEFAULT_CONFIG_PATH
    data: Dict[str, Any] = {}

    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Не удалось разобрать {path}: {e}") from e

        if loaded is None:
            logger.debug(f"[CONFIG] {path} пустой — используем значения по умолчанию")
        elif not isinstance(loaded, dict):
            raise ConfigError(f"{path}: ожидался словарь настроек")
        else:
            data.update(loaded)
            logger.debug(f"[CONFIG] Загружены настройки из {path}")
    else:
        logger.debug(f"[CONFIG] {path} не найден — используем значения по умолчанию")

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Некорректные настройки: {e}") from e

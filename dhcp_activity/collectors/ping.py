import platform
import subprocess
from typing import List, Optional

from loguru import logger


class PingProbe:
    """
    Одна ICMP-проверка через системный ping.
    True — ответ получен, False — ответа нет, None — проверить не удалось (нет ping и т.п.).
    MAC ответившего хоста не проверяется: на адресе может жить чужое устройство.
    """

    def __init__(self, timeout: float = 1.0):
        self.timeout = timeout
        self.is_windows = platform.system().lower() == "windows"

    def build_command(self, ip: str) -> List[str]:
        if self.is_windows:
            return ["ping", "-n", "1", "-w", str(int(self.timeout * 1000)), ip]
        return ["ping", "-c", "1", "-W", str(max(1, int(round(self.timeout)))), ip]

    def __call__(self, ip: str) -> Optional[bool]:
        try:
            result = subprocess.run(
                self.build_command(ip),
                capture_output=True,
                timeout=self.timeout + 2,
            )
        except subprocess.TimeoutExpired:
            logger.debug(f"[PING] {ip}: таймаут")
            return False
        except OSError as e:
            logger.warning(f"[PING] {ip}: ping не запустился: {e}")
            return None

        if result.returncode != 0:
            return False
        # Windows возвращает 0 и на "Destination host unreachable" от шлюза
        if self.is_windows and b"TTL=" not in result.stdout.upper():
            return False
        return True


def no_probe(ip: str) -> Optional[bool]:
    """Заглушка для --no-ping: статус неизвестен."""
    return None

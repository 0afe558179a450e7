class DhcpActivityError(Exception):
    """Базовая ошибка проекта."""


class HostApiError(DhcpActivityError):
    """DHCP-сервер не отдал scope или резервации. Без них отчёт строить не из чего."""


class ConfigError(DhcpActivityError):
    """Некорректный файл настроек."""

from .registry import available_sinks, get_sink, register_sink

# Импорт модулей регистрирует вывод в registry
from . import file  # noqa: E402,F401
from . import table  # noqa: E402,F401

__all__ = ["available_sinks", "get_sink", "register_sink"]

"""Отчёт по активности DHCP-резерваций Windows DHCP-сервера."""

__version__ = "0.1.0"

import sys

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)


def setup_logger(verbose: bool = False, sink=None) -> None:
    """
    Настраивает loguru.
    По умолчанию в stderr идут только предупреждения и ошибки,
    с verbose — ещё и DEBUG-хроника по файлам логов и резервациям.
    """
    logger.remove()
    logger.add(
        sink or sys.stderr,
        format=CONSOLE_FORMAT,
        level="DEBUG" if verbose else "WARNING",
        colorize=None if sink is None else False,
    )

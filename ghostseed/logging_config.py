"""
Configuration du logging via loguru.

Deux sorties :
- console (stderr) : messages colores, niveau reglable par -v/-q
- fichier : JSON avec rotation, toujours en DEBUG

Les bibliotheques qui passent par le module logging standard (httpx,
httpcore) sont redirigees vers loguru.
"""

import logging
import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | "
    "<level>{message}</level>"
)

# Loggers standard bavards ramenes a WARNING
NOISY_LOGGERS = ("httpx", "httpcore")


class InterceptHandler(logging.Handler):
    """Handler logging standard qui republie chaque record dans loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Remonte jusqu'a l'appelant hors du module logging
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def intercept_standard_logging() -> None:
    """Route le logging standard vers loguru (idempotent)."""
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO, force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/ghostseed.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """
    (Re)configure les handlers loguru.

    Appelee au demarrage puis de nouveau par le callback CLI quand -v ou -q
    changent le niveau de la console.

    Args:
        log_level: Niveau minimum sur la console (DEBUG, INFO, WARNING, ERROR)
        log_file: Fichier JSON (son repertoire est cree au besoin)
        rotation_size: Taille declenchant la rotation (ex: "10 MB")
        retention_count: Nombre de fichiers tournes conserves
    """
    logger.remove()
    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    intercept_standard_logging()
    logger.debug(f"Logging configure (console={log_level}, fichier={log_file})")

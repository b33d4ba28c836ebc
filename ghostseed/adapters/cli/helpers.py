"""
Utilitaires partages pour les commandes CLI de GhostSeed.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container neuf
- close_container : fermeture des clients HTTP et du cache de sonde
"""

from contextlib import contextmanager
from functools import wraps

from loguru import logger as loguru_logger
from rich.console import Console

from ghostseed.container import Container

# Console globale pour tous les affichages
console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("ghostseed")
    try:
        yield
    finally:
        loguru_logger.enable("ghostseed")


def with_container():
    """
    Decorateur qui injecte un container neuf en premier argument.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator


async def close_container(container: Container) -> None:
    """
    Ferme les ressources du pipeline (clients, uploaders, cache).

    A appeler apres container.release_pipeline(), qui a deja instancie
    chacun de ces singletons.
    """
    for provider in (container.radarr_client, container.sonarr_client):
        client = provider()
        if client is not None:
            await client.close()
    await container.publisher().close()
    cache = container.probe_cache()
    if cache is not None:
        cache.close()

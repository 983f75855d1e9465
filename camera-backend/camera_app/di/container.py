# Standard library imports
import logging

# Local application imports
from ..infrastructure.db.mongo_connection import close_database
from ..infrastructure.http_client_factory import close_shared_http_client
from .base_container import BaseContainer
from .providers import (
    CameraProvider,
    DatabaseProvider,
    RepositoryProvider,
)

logger = logging.getLogger(__name__)


class DIContainer(BaseContainer):
    """
    Application container for the camera backend.

    Providers register in dependency order: Mongo collections, then the
    repositories built on them, then the camera service and use cases.
    """

    def __init__(self) -> None:
        super().__init__()
        DatabaseProvider.register(self)
        RepositoryProvider.register(self)
        CameraProvider.register(self)


_container: DIContainer | None = None


def get_container() -> DIContainer:
    """
    Get the process-wide container, building it on first use

    Returns:
        DIContainer with the camera service and use cases registered
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


async def shutdown_container() -> None:
    """Release the probe HTTP client and the Mongo client and drop the container"""
    global _container
    await close_shared_http_client()
    close_database()
    _container = None
    logger.info("Camera backend container shut down")

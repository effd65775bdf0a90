"""
Memoized handle for a lazily-created shared object (e.g. an upstream client).
"""

import logging
from typing import Callable, Generic, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClientHandle(Generic[T]):
    """
    Lazily creates one instance on first use and reuses it afterwards.

    The handle is passed explicitly to whatever needs the instance; there is
    no module-level singleton. ``reset()`` tears the instance down so the
    next call builds a fresh one.

    Example:
        >>> handle = ClientHandle(lambda: HttpUpstreamClient(timeout=10))
        >>> client = handle()
        >>> handle() is client
        True
    """

    def __init__(self, factory: Callable[[], T]):
        self.factory = factory
        self._instance: Optional[T] = None
        self._initialized = False

    def __call__(self) -> T:
        if not self._initialized:
            self._instance = self.factory()
            self._initialized = True
            logger.debug(f"Initialized {type(self._instance).__name__}")
        return self._instance

    @property
    def initialized(self) -> bool:
        return self._initialized

    def reset(self) -> Optional[T]:
        """
        Drop the instance, closing it if it has a close() method.

        Returns:
            The previous instance, or None if none was created
        """
        instance = self._instance
        was_initialized = self._initialized
        self._instance = None
        self._initialized = False

        if was_initialized:
            close = getattr(instance, "close", None)
            if callable(close):
                close()
            logger.debug(f"Reset {type(instance).__name__}")
        return instance

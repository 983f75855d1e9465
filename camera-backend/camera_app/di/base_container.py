# Standard library imports
from threading import Lock
from typing import Any, Callable, Dict, Hashable


class BaseContainer:
    """
    Minimal dependency container.

    Keys are usually the abstract type being provided (e.g. CameraRepository)
    or a plain string for infrastructure handles ("camera_collection").
    Singletons are returned as registered; factories build a new instance
    on every get().
    """

    def __init__(self) -> None:
        self._singletons: Dict[Hashable, Any] = {}
        self._factories: Dict[Hashable, Callable[[], Any]] = {}
        self._lock = Lock()

    def register_singleton(self, key: Hashable, instance: Any) -> None:
        with self._lock:
            self._factories.pop(key, None)
            self._singletons[key] = instance

    def register_factory(self, key: Hashable, factory: Callable[[], Any]) -> None:
        with self._lock:
            self._singletons.pop(key, None)
            self._factories[key] = factory

    def get(self, key: Hashable) -> Any:
        """
        Resolve a registration

        Raises:
            ValueError: If nothing is registered under key
        """
        with self._lock:
            if key in self._singletons:
                return self._singletons[key]
            factory = self._factories.get(key)

        # Factories may resolve their own dependencies, so call outside the lock
        if factory is None:
            raise ValueError(f"No registration found for {getattr(key, '__name__', key)}")
        return factory()

    def is_registered(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._singletons or key in self._factories

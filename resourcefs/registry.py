import logging
import threading
from collections.abc import Iterable
from typing import Optional, Union

from .locators import Locator
from .ResourceMount import ResourceMount
from .ResourcePath import ResourcePath
from .utils import MountConflictError, ResourceNotFoundError

logger = logging.getLogger(__name__)


class MountRegistry:
    """
    Thread-safe mapping from mount names to mounts.

    There is no implicit global instance. Create a registry, pass it to whoever needs it, and it holds
    no state beyond its mounts: it is initialized by the first mount call and empty again after the last
    name has been unmounted.

    Mounting is insert-if-absent. The index of a new mount is built outside of the lock while the name is
    reserved, so that concurrent mount calls for the same name result in exactly one winner and slow
    indexing does not block mounts and lookups of other names.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._mounts: dict[str, ResourceMount] = {}
        self._pending: set[str] = set()

    def mount(self, name: str, locators: Iterable[Union[Locator, str]], **options) -> ResourceMount:
        """
        Builds a new mount from the locators and registers it under the name.
        Raises MountConflictError if the name is already mounted or currently being mounted and
        IndexingError if the index could not be built. In both cases, the registry is not modified.
        """
        with self._lock:
            if name in self._mounts or name in self._pending:
                raise MountConflictError(f"Mount '{name}' already exists!")
            self._pending.add(name)

        try:
            mount = ResourceMount(name, locators, registry=self, **options)
            with self._lock:
                self._mounts[name] = mount
        finally:
            with self._lock:
                self._pending.discard(name)

        logger.debug("Mounted '%s' with %d paths.", name, len(mount.index))
        return mount

    def unmount(self, name: str, mount: Optional[ResourceMount] = None) -> bool:
        """
        Removes the mount registered under the name. If a mount object is given, it is only removed if it is
        the one currently registered. Returns False if nothing was removed.
        Channels opened on the mount before stay usable.
        """
        with self._lock:
            registered = self._mounts.get(name, None)
            if registered is None or (mount is not None and registered is not mount):
                return False
            del self._mounts[name]

        logger.debug("Unmounted '%s'.", name)
        return True

    def get(self, name: str) -> Optional[ResourceMount]:
        with self._lock:
            return self._mounts.get(name, None)

    def lookup(self, name: str) -> ResourceMount:
        mount = self.get(name)
        if mount is None:
            raise ResourceNotFoundError(f"Mount '{name}' does not exist!")
        return mount

    def resolve_uri(self, uri: str) -> ResourcePath:
        """Returns the path for a 'resources://<mount>/<path>' URI. The mount must be registered."""
        path = ResourcePath.from_uri(uri)
        self.lookup(path.mountName)
        return path

    def names(self) -> list[str]:
        with self._lock:
            return list(self._mounts)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._mounts)

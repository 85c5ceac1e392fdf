import logging
from collections.abc import Iterable, Iterator
from typing import Optional

from .attributes import ResourceAttributes, create_directory_attributes, create_file_attributes
from .locators import Locator
from .ResourcePath import SEPARATOR, ResourcePath
from .utils import IndexingError, ResourceNotFoundError

logger = logging.getLogger(__name__)

COLLISION_POLICIES = ('ignore', 'warn', 'raise')


class ResourceIndex:
    """
    Maps each path of a mount to its attributes. The index is built once in the constructor from the
    locators, in their given order, and is never modified afterwards. Therefore, it can be read
    concurrently without locking.

    For each locator, the path of the locator and all its parent paths are inserted. The last segment
    becomes a file node, all others become directory nodes. If a node already exists at a path, the first
    inserted node is kept. This may leave a file node at a path where a later locator would have needed a
    directory or vice versa. Such collisions are handled according to the collision policy:

     - 'ignore': Keep the first node silently.
     - 'warn': Keep the first node and log a warning.
     - 'raise': Abort with an IndexingError.

    The root directory always exists.
    """

    def __init__(self, mountName: str, locators: Iterable[Locator], collisionPolicy: str = 'warn') -> None:
        if collisionPolicy not in COLLISION_POLICIES:
            raise ValueError(f"Collision policy must be one of {COLLISION_POLICIES} but got: {collisionPolicy}")

        self.mountName = mountName
        self.collisionPolicy = collisionPolicy
        self.root = ResourcePath(mountName, SEPARATOR)
        self.totalSize = 0
        self._nodes: dict[ResourcePath, ResourceAttributes] = {self.root: create_directory_attributes(self.root)}

        for locator in locators:
            self._insert(locator)

        logger.info(
            "Indexed %d paths with a total size of %d B for mount: %s", len(self._nodes), self.totalSize, mountName
        )

    def _on_collision(self, existing: ResourceAttributes, locator: Locator, wantsDirectory: bool) -> None:
        wanted = 'directory' if wantsDirectory else 'file'
        message = (
            f"Cannot insert {wanted} for {locator!r} at {existing.path.as_posix()} because a "
            f"{existing.kind.value} already exists there. Keeping the first one."
        )
        if self.collisionPolicy == 'raise':
            raise IndexingError(message)
        if self.collisionPolicy == 'warn':
            logger.warning(message)

    def _insert(self, locator: Locator) -> None:
        full = ResourcePath(self.mountName, locator.path())
        if full.is_root:
            existing = self._nodes[self.root]
            self._on_collision(existing, locator, wantsDirectory=False)
            return

        for count in range(1, full.name_count + 1):
            current = full.subpath(0, count)
            isFile = current == full

            existing = self._nodes.get(current, None)
            if existing is not None:
                if isFile or not existing.is_directory:
                    self._on_collision(existing, locator, wantsDirectory=not isFile)
                continue

            if isFile:
                try:
                    attributes = create_file_attributes(current, locator)
                except Exception as exception:
                    raise IndexingError(f"Failed to query metadata for {locator!r}: {exception}") from exception
            else:
                attributes = create_directory_attributes(current)

            self._nodes[current] = attributes
            self.totalSize += attributes.size

    @property
    def total_size(self) -> int:
        return self.totalSize

    def get(self, path: ResourcePath) -> Optional[ResourceAttributes]:
        return self._nodes.get(path, None)

    def __getitem__(self, path: ResourcePath) -> ResourceAttributes:
        attributes = self._nodes.get(path, None)
        if attributes is None:
            raise ResourceNotFoundError(f"No such file or directory: {path}")
        return attributes

    def __contains__(self, path) -> bool:
        return path in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[ResourcePath]:
        return iter(self._nodes)

    def items(self):
        return self._nodes.items()

    def children(self, path: ResourcePath) -> list[ResourcePath]:
        """Returns the direct children of the given path, which need not exist, in no particular order."""
        return [
            candidate
            for candidate in self._nodes
            if candidate.name_count == path.name_count + 1 and candidate.starts_with(path)
        ]

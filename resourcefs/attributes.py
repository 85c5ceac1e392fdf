import dataclasses
import enum
import stat
from typing import TYPE_CHECKING, Any, Optional

from .ResourcePath import ResourcePath

if TYPE_CHECKING:
    from .locators import Locator

EPOCH = 0.0

BASIC_ATTRIBUTE_NAMES = (
    'lastModifiedTime',
    'lastAccessTime',
    'creationTime',
    'size',
    'isRegularFile',
    'isDirectory',
    'isSymbolicLink',
    'isOther',
    'fileKey',
)


class NodeKind(enum.Enum):
    DIRECTORY = 'directory'
    FILE = 'file'


@dataclasses.dataclass(frozen=True)
class ResourceAttributes:
    """
    Metadata of one node in the index. Directories have no content, size 0, and epoch-zero timestamps.
    Files carry the size and timestamps reported by their locator, which is also kept for opening them.
    All times are seconds since the epoch.
    """

    # fmt: off
    kind     : NodeKind
    path     : ResourcePath
    size     : int   = 0
    mtime    : float = EPOCH
    ctime    : float = EPOCH
    locator  : Optional['Locator'] = dataclasses.field(default=None, compare=False, repr=False)
    # fmt: on

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def is_regular_file(self) -> bool:
        return self.kind is NodeKind.FILE

    @property
    def is_symbolic_link(self) -> bool:
        return False

    @property
    def is_other(self) -> bool:
        return False

    @property
    def last_modified_time(self) -> float:
        return self.mtime

    @property
    def last_access_time(self) -> float:
        # Access times are not tracked.
        return self.mtime

    @property
    def creation_time(self) -> float:
        return self.ctime

    @property
    def file_key(self) -> ResourcePath:
        """Identity token for the node. It is the node's own path and not an inode number."""
        return self.path

    @property
    def mode(self) -> int:
        return 0o555 | stat.S_IFDIR if self.is_directory else 0o444 | stat.S_IFREG

    def as_dict(self) -> dict[str, Any]:
        return {
            'lastModifiedTime': self.last_modified_time,
            'lastAccessTime': self.last_access_time,
            'creationTime': self.creation_time,
            'size': self.size,
            'isRegularFile': self.is_regular_file,
            'isDirectory': self.is_directory,
            'isSymbolicLink': self.is_symbolic_link,
            'isOther': self.is_other,
            'fileKey': self.file_key,
        }


def create_directory_attributes(path: ResourcePath) -> ResourceAttributes:
    return ResourceAttributes(kind=NodeKind.DIRECTORY, path=path)


def create_file_attributes(path: ResourcePath, locator: 'Locator') -> ResourceAttributes:
    """Queries the locator for its metadata. Errors of the metadata request are propagated as they are."""
    metadata = locator.metadata()
    # fmt: off
    return ResourceAttributes(
        kind    = NodeKind.FILE,
        path    = path,
        size    = metadata.size,
        mtime   = metadata.mtime if metadata.mtime is not None else EPOCH,
        ctime   = metadata.ctime if metadata.ctime is not None else EPOCH,
        locator = locator,
    )
    # fmt: on

import dataclasses
import datetime
import email.utils
import io
import logging
import time
import urllib.parse
from abc import ABC, abstractmethod
from typing import IO, Any, Optional, Union

import fsspec
import fsspec.core

from .ResourcePath import SEPARATOR
from .utils import overrides

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ResourceMetadata:
    # fmt: off
    size  : int
    mtime : Optional[float] = None
    ctime : Optional[float] = None
    # fmt: on


class Locator(ABC):
    """
    Reference to one external resource. It knows the absolute path at which the resource should appear
    inside a mount and gives access to the resource's metadata and contents.
    """

    @abstractmethod
    def path(self) -> str:
        """Absolute, separator-delimited path of this resource inside the mount."""

    @abstractmethod
    def open_stream(self) -> IO[bytes]:
        """Returns a new readable binary stream positioned at the start of the resource."""

    @abstractmethod
    def metadata(self) -> ResourceMetadata:
        """May raise OSError or any other exception the backend produces for failed requests."""


def _to_timestamp(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.timestamp()
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        # fsspec.implementations.ftp.FTPFileSystem: 'modify': '20241004165129'
        if len(value) == 14 and value.isdigit():
            return time.mktime(time.strptime(value, "%Y%m%d%H%M%S"))
        try:
            return datetime.datetime.fromisoformat(value).timestamp()
        except ValueError:
            pass
        # HTTP headers use RFC 2822 dates, e.g., 'Wed, 21 Oct 2015 07:28:00 GMT'
        try:
            return email.utils.parsedate_to_datetime(value).timestamp()
        except (TypeError, ValueError):
            pass
    logger.debug("Ignoring unknown time format: %s", value)
    return None


def _first_timestamp(entry: dict[str, Any], keys) -> Optional[float]:
    # There is no standardized key for times in fsspec info dictionaries:
    # https://github.com/fsspec/filesystem_spec/issues/1680#issuecomment-2368750882
    for key in keys:
        timestamp = _to_timestamp(entry.get(key, None))
        if timestamp is not None:
            return timestamp
    return None


class FSSpecLocator(Locator):
    """
    Locator for any URL supported by fsspec, e.g., file://, memory://, http(s)://, ftp://, s3://.

    The path inside the mount defaults to the path component of the URL, i.e., 'https://host/a/b/x.jar'
    will appear as '/a/b/x.jar'. It can be overridden with the 'path' argument.
    """

    MODIFICATION_TIME_KEYS = ('mtime', 'modified', 'LastModified', 'last_modified', 'modify')
    CREATION_TIME_KEYS = ('created', 'ctime', 'creation_time')

    def __init__(self, url: str, path: Optional[str] = None, **storageOptions) -> None:
        if not isinstance(url, str):
            raise ValueError(f"Expected URL string but got: {url}")
        self.url = url
        self._path = path if path is not None else (urllib.parse.unquote(urllib.parse.urlsplit(url).path) or SEPARATOR)

        url_to_fs = fsspec.url_to_fs if hasattr(fsspec, 'url_to_fs') else fsspec.core.url_to_fs
        self.fileSystem, self.fsPath = url_to_fs(url, **storageOptions)

    @overrides(Locator)
    def path(self) -> str:
        return self._path

    @overrides(Locator)
    def open_stream(self) -> IO[bytes]:
        return self.fileSystem.open(self.fsPath, mode='rb')

    def _count_bytes(self) -> int:
        size = 0
        with self.open_stream() as file:
            while chunk := file.read(io.DEFAULT_BUFFER_SIZE):
                size += len(chunk)
        return size

    @overrides(Locator)
    def metadata(self) -> ResourceMetadata:
        info = self.fileSystem.info(self.fsPath)
        if info.get('type', 'file') == 'directory':
            raise IsADirectoryError(f"URL does not point to a file: {self.url}")

        size = info.get('size', None)
        if size is None:
            # E.g., HTTP servers are not required to send a Content-Length.
            logger.debug("Size of %s is unknown. Will download it once to determine its size.", self.url)
            size = self._count_bytes()

        return ResourceMetadata(
            size=int(size),
            mtime=_first_timestamp(info, FSSpecLocator.MODIFICATION_TIME_KEYS),
            ctime=_first_timestamp(info, FSSpecLocator.CREATION_TIME_KEYS),
        )

    def __repr__(self) -> str:
        return f"FSSpecLocator({self.url!r}, path={self._path!r})"


class BytesLocator(Locator):
    """Locator for in-memory contents."""

    def __init__(self, path: str, data: bytes, mtime: Optional[float] = None, ctime: Optional[float] = None) -> None:
        self._path = path
        self.data = bytes(data)
        self.mtime = mtime
        self.ctime = ctime

    @overrides(Locator)
    def path(self) -> str:
        return self._path

    @overrides(Locator)
    def open_stream(self) -> IO[bytes]:
        return io.BytesIO(self.data)

    @overrides(Locator)
    def metadata(self) -> ResourceMetadata:
        return ResourceMetadata(size=len(self.data), mtime=self.mtime, ctime=self.ctime)

    def __repr__(self) -> str:
        return f"BytesLocator({self._path!r}, <{len(self.data)} B>)"


def as_locator(locatorOrURL: Union[Locator, str]) -> Locator:
    if isinstance(locatorOrURL, Locator):
        return locatorOrURL
    if isinstance(locatorOrURL, str):
        return FSSpecLocator(locatorOrURL)
    raise ValueError(f"Expected a Locator or an URL string but got: {type(locatorOrURL)}")

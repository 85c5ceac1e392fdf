import io
import logging
from typing import IO, Optional

from .attributes import ResourceAttributes
from .utils import ClosedResourceError, FixedRawIOBase, NotAFileError, UnsupportedOperationError, overrides

logger = logging.getLogger(__name__)


class ReadChannel(FixedRawIOBase):
    """
    Sequential read-only byte access to the resource behind one file node.

    Each channel owns its own stream obtained from the locator and is not thread-safe.

    Performance caveat: resources are not assumed to support random access. Every seek to a position
    different from the current one closes the current stream, opens a new one from the locator, and reads
    and discards all bytes up to the requested offset. Repositioning therefore costs O(offset) bytes of
    I/O, which for remote resources means downloading everything before the offset again.
    """

    SKIP_CHUNK_SIZE = 1024 * 1024

    def __init__(self, attributes: ResourceAttributes) -> None:
        super().__init__()
        self.attributes = attributes
        self._position = 0
        self._stream: Optional[IO[bytes]] = None

        if not attributes.is_regular_file or attributes.locator is None:
            raise NotAFileError(f"Path is not a file: {attributes.path}")
        self._stream = attributes.locator.open_stream()

    def _check_open(self) -> IO[bytes]:
        if self.closed or self._stream is None:
            raise ClosedResourceError(f"Channel for {self.attributes.path} is closed!")
        return self._stream

    @property
    def path(self):
        return self.attributes.path

    @property
    def size(self) -> int:
        return self.attributes.size

    @property
    def position(self) -> int:
        return self._position

    def is_open(self) -> bool:
        return not self.closed

    @overrides(io.RawIOBase)
    def readable(self) -> bool:
        self._check_open()
        return True

    @overrides(io.RawIOBase)
    def writable(self) -> bool:
        self._check_open()
        return False

    @overrides(io.RawIOBase)
    def seekable(self) -> bool:
        self._check_open()
        return True

    @overrides(io.RawIOBase)
    def read(self, size: int = -1) -> bytes:
        stream = self._check_open()
        if size is None or size < 0:
            result = stream.read()
        elif size == 0:
            return b''
        else:
            result = stream.read(size)
        result = result or b''
        self._position += len(result)
        return result

    @overrides(io.RawIOBase)
    def readinto(self, buffer):
        with memoryview(buffer) as view, view.cast("B") as byteView:  # type: ignore
            readBytes = self.read(len(byteView))
            byteView[: len(readBytes)] = readBytes
        return len(readBytes)

    def _skip(self, stream: IO[bytes], count: int) -> int:
        skipped = 0
        while skipped < count:
            chunk = stream.read(min(count - skipped, ReadChannel.SKIP_CHUNK_SIZE))
            if not chunk:
                break
            skipped += len(chunk)
        return skipped

    @overrides(io.RawIOBase)
    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._check_open()
        if whence == io.SEEK_CUR:
            offset += self._position
        elif whence == io.SEEK_END:
            offset += self.attributes.size
        elif whence != io.SEEK_SET:
            raise ValueError(f"Invalid whence: {whence}")

        if offset < 0:
            raise ValueError("Trying to seek before the start of the file!")
        if offset == self._position:
            return self._position

        logger.debug("Reopen %s and skip %d bytes to reposition the channel.", self.attributes.path, offset)
        assert self.attributes.locator is not None
        stream = self.attributes.locator.open_stream()
        try:
            # Skipping past the end leaves the position at the end, like reading would.
            self._position = self._skip(stream, offset)
        except BaseException:
            stream.close()
            raise

        oldStream, self._stream = self._stream, stream
        if oldStream is not None:
            oldStream.close()
        return self._position

    @overrides(io.RawIOBase)
    def tell(self) -> int:
        self._check_open()
        return self._position

    @overrides(io.RawIOBase)
    def write(self, buffer):
        raise UnsupportedOperationError("Resources can only be read!")

    @overrides(io.RawIOBase)
    def truncate(self, size=None):
        raise UnsupportedOperationError("Resources can only be read!")

    @overrides(io.RawIOBase)
    def fileno(self) -> int:
        raise UnsupportedOperationError("Resources have no file descriptor!")

    @overrides(io.RawIOBase)
    def close(self) -> None:
        if self.closed:
            return
        stream, self._stream = self._stream, None
        try:
            if stream is not None:
                stream.close()
        finally:
            super().close()

    def __repr__(self) -> str:
        return f"ReadChannel({self.attributes.path!r}, position={self._position}, closed={self.closed})"

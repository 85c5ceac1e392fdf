import fnmatch
import functools
import urllib.parse
from collections.abc import Iterator
from typing import Optional, Union

SCHEME = "resources"
SEPARATOR = "/"


@functools.total_ordering
class ResourcePath:
    """
    Immutable, always absolute path inside one named mount.

    The path is stored as a tuple of non-empty segments. The string given to the constructor is not
    retained verbatim, i.e., '/a//b/', 'a/b', and '/a/b' all denote the same path. The root has zero segments.
    Two paths are equal if and only if their mount names and segments are equal.

    Example:

        path = ResourcePath("maven", "/org/example/x.jar")
        path.parent            # ResourcePath("maven", "/org/example")
        path.get_name(0)       # ResourcePath("maven", "/org")
        path.uri               # "resources://maven/org/example/x.jar"
    """

    __slots__ = ('mountName', 'segments', '_encoded')

    def __init__(self, mountName: str, path: str = SEPARATOR) -> None:
        if path is None:
            raise TypeError("Path must not be None!")
        self.mountName = mountName
        self.segments: tuple[str, ...] = (
            () if path == SEPARATOR else tuple(part for part in path.split(SEPARATOR) if part)
        )
        # Used for ordering. Mirrors the byte-wise comparison of the path without the leading separator.
        self._encoded = SEPARATOR.join(self.segments).encode('utf-8')

    @classmethod
    def _from_segments(cls, mountName: str, segments) -> 'ResourcePath':
        return cls(mountName, SEPARATOR + SEPARATOR.join(segments))

    @classmethod
    def from_uri(cls, uri: str) -> 'ResourcePath':
        """Parses 'resources://<mount>/<path>' back into a path."""
        parsed = urllib.parse.urlsplit(uri)
        if parsed.scheme != SCHEME:
            raise ValueError(f"Expected URI with scheme {SCHEME}:// but got: {uri}")
        if not parsed.netloc:
            raise ValueError(f"URI does not specify a mount name: {uri}")
        return cls(urllib.parse.unquote(parsed.netloc), urllib.parse.unquote(parsed.path) or SEPARATOR)

    def _coerce(self, other: Union['ResourcePath', str]) -> 'ResourcePath':
        if isinstance(other, ResourcePath):
            return other
        if isinstance(other, str):
            return ResourcePath(self.mountName, other)
        raise TypeError(f"Expected ResourcePath or str but got: {type(other)}")

    # Segment access

    @property
    def parts(self) -> tuple[str, ...]:
        return self.segments

    @property
    def name_count(self) -> int:
        return len(self.segments)

    @property
    def name(self) -> str:
        """Last segment or an empty string for the root."""
        return self.segments[-1] if self.segments else ''

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def root(self) -> 'ResourcePath':
        return ResourcePath(self.mountName, SEPARATOR)

    @property
    def parent(self) -> Optional['ResourcePath']:
        if not self.segments:
            return None
        return ResourcePath._from_segments(self.mountName, self.segments[:-1])

    @property
    def file_name(self) -> Optional['ResourcePath']:
        return self.get_name(len(self.segments) - 1) if self.segments else None

    def get_name(self, index: int) -> 'ResourcePath':
        """Returns the segment at the given index as a single-segment path."""
        if index < 0 or index >= len(self.segments):
            raise IndexError(f"Segment index {index} is out of range for {self} with {len(self.segments)} segments!")
        return ResourcePath._from_segments(self.mountName, self.segments[index : index + 1])

    def subpath(self, begin: int, end: int) -> 'ResourcePath':
        """Returns the segments [begin, end) as a new path. The range must be non-empty."""
        if begin < 0 or begin >= len(self.segments) or end <= begin or end > len(self.segments):
            raise IndexError(f"Invalid segment range [{begin}, {end}) for {self} with {len(self.segments)} segments!")
        return ResourcePath._from_segments(self.mountName, self.segments[begin:end])

    def __iter__(self) -> Iterator['ResourcePath']:
        for index in range(len(self.segments)):
            yield self.get_name(index)

    # Comparison

    def starts_with(self, other: Union['ResourcePath', str]) -> bool:
        other = self._coerce(other)
        if other.mountName != self.mountName or len(other.segments) > len(self.segments):
            return False
        return self.segments[: len(other.segments)] == other.segments

    def ends_with(self, other: Union['ResourcePath', str]) -> bool:
        other = self._coerce(other)
        if other.mountName != self.mountName or len(other.segments) > len(self.segments):
            return False
        # Walk backwards from the last segment.
        for ownSegment, otherSegment in zip(reversed(self.segments), reversed(other.segments)):
            if ownSegment != otherSegment:
                return False
        return True

    def compare(self, other: 'ResourcePath') -> int:
        """
        Byte-wise lexicographic comparison of the UTF-8 encoded paths. A shorter path sorts first if it is
        a prefix of the other, e.g., '/a' < '/aa'. The mount name is not taken into account.
        Returns a negative number, zero, or a positive number like a C-style comparator.
        """
        for ownByte, otherByte in zip(self._encoded, other._encoded):
            if ownByte != otherByte:
                return ownByte - otherByte
        return len(self._encoded) - len(other._encoded)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResourcePath):
            return NotImplemented
        return self.mountName == other.mountName and self.segments == other.segments

    def __lt__(self, other) -> bool:
        if not isinstance(other, ResourcePath):
            return NotImplemented
        # Break ties of equal paths in different mounts so that the ordering stays consistent with __eq__.
        return (self._encoded, self.mountName) < (other._encoded, other.mountName)

    def __hash__(self) -> int:
        return hash((self.mountName, self.segments))

    def match(self, pattern: str) -> bool:
        """
        Glob matching of the path against the pattern. Absolute patterns must match all segments,
        relative patterns are matched against the trailing segments, similar to pathlib.PurePath.match.
        """
        patternSegments = [part for part in pattern.split(SEPARATOR) if part]
        if pattern.startswith(SEPARATOR) and len(patternSegments) != len(self.segments):
            return False
        if not patternSegments or len(patternSegments) > len(self.segments):
            return False
        return all(
            fnmatch.fnmatchcase(segment, patternSegment)
            for segment, patternSegment in zip(reversed(self.segments), reversed(patternSegments))
        )

    # Navigation

    def is_absolute(self) -> bool:
        return True

    def to_absolute_path(self) -> 'ResourcePath':
        return self

    def normalize(self) -> 'ResourcePath':
        segments: list[str] = []
        for segment in self.segments:
            if segment == '.':
                continue
            if segment == '..':
                if segments:
                    segments.pop()
                continue
            segments.append(segment)
        return ResourcePath._from_segments(self.mountName, segments)

    def resolve(self, other: Union['ResourcePath', str]) -> 'ResourcePath':
        """
        Absolute paths ignore this base and are returned unchanged. Only relative strings, i.e.,
        without a leading separator, are appended to this path.
        """
        if isinstance(other, str) and not other.startswith(SEPARATOR):
            return self.joinpath(other)
        return self._coerce(other)

    def resolve_sibling(self, other: Union['ResourcePath', str]) -> 'ResourcePath':
        parent = self.parent
        return self._coerce(other) if parent is None else parent.resolve(other)

    def relativize(self, other: Union['ResourcePath', str]) -> str:
        """
        Returns the relative POSIX path leading from this path to the other one: one '..' for each of
        this path's segments after the shared prefix followed by the remaining segments of the other path.
        """
        other = self._coerce(other)
        if other.mountName != self.mountName:
            raise ValueError(f"Cannot relativize {other} against {self} because they belong to different mounts!")

        shared = 0
        for ownSegment, otherSegment in zip(self.segments, other.segments):
            if ownSegment != otherSegment:
                break
            shared += 1

        return SEPARATOR.join(['..'] * (len(self.segments) - shared) + list(other.segments[shared:]))

    def joinpath(self, *others: str) -> 'ResourcePath':
        segments = list(self.segments)
        for other in others:
            segments.extend(part for part in other.split(SEPARATOR) if part)
        return ResourcePath._from_segments(self.mountName, segments)

    def __truediv__(self, other: str) -> 'ResourcePath':
        if not isinstance(other, str):
            return NotImplemented
        return self.joinpath(other)

    # String forms

    def as_posix(self) -> str:
        return SEPARATOR + SEPARATOR.join(self.segments)

    @property
    def uri(self) -> str:
        return f"{SCHEME}://{urllib.parse.quote(self.mountName, safe='')}{urllib.parse.quote(self.as_posix())}"

    def __str__(self) -> str:
        return self.uri

    def __repr__(self) -> str:
        return f"ResourcePath({self.mountName!r}, {self.as_posix()!r})"

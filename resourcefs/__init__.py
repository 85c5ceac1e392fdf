"""resourcefs

Presents an ordered list of URLs as one synthetic, read-only directory hierarchy so that path-oriented code
can list, inspect, and read them like files on disk. Multiple hierarchies, called mounts, can coexist and are
identified by name.

The resource URLs are opened with fsspec, i.e., all protocols supported by it can be used. The path of each
resource inside the mount is the path component of its URL. All parent folders are created implicitly.

For performance and maintenance reasons, there are almost no module-level reimports, ergo you should specify
the full module hierarchy for imports.

Example:

    from resourcefs.registry import MountRegistry

    registry = MountRegistry()
    mount = registry.mount("libs", ["https://repo.example.org/a/b/x.jar", "https://repo.example.org/a/c/y.jar"])

    mount.list_children("/a")               # [ResourcePath('libs', '/a/b'), ResourcePath('libs', '/a/c')]
    attributes = mount.attributes_of("/a/b/x.jar")

    print(f"Contents of /a/b/x.jar ({attributes.size} B):")
    with mount.open("/a/b/x.jar") as file:
        print(file.read())

    registry.unmount("libs")
"""

from .version import __version__

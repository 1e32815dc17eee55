# ABOUTME: POSIX-style path normalization for container entry names.
# ABOUTME: Resolves manifest hrefs against the package document's directory.


def normalize(path: str) -> str:
    """Collapse `.` and `..` segments and redundant slashes.

    A `..` with nothing left to pop is dropped, so the result never climbs
    above the container root and never has a leading slash.
    """
    parts: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts:
                parts.pop()
            continue
        parts.append(segment)
    return "/".join(parts)


def parent_dir(path: str) -> str:
    """Return everything before the last slash, or "" for a top-level name."""
    index = path.rfind("/")
    return path[:index] if index >= 0 else ""


def resolve(base_dir: str, href: str) -> str:
    """Turn an href relative to base_dir into a container entry name."""
    return normalize(f"{base_dir}/{href}")

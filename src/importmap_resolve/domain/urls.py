"""URL parsing, reference resolution, and path conversion.

Pure functions over strings. A URL is always handled in its serialized
form: every function that accepts or produces a URL returns the normalized
serialization, or ``None`` when the input is not a valid URL.

Splitting follows RFC 3986 Appendix B, reference resolution follows
RFC 3986 Section 5.2. Normalization is limited to what import-map
matching relies on: lowercase scheme and host, default ports dropped,
dot segments removed, and an empty path on an authority URL becomes ``/``.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, replace
from pathlib import PurePosixPath, PureWindowsPath
from urllib.parse import quote

_SCHEME_PATTERN = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")
_REFERENCE_PATTERN = re.compile(r"^(//([^/?#]*))?([^?#]*)(\?([^#]*))?(#(.*))?$", re.DOTALL)

# ASCII whitespace and C0/DEL controls are never allowed in a URL here.
_FORBIDDEN_PATTERN = re.compile(r"[\x00-\x20\x7f]")

_SINGLE_DOT = frozenset({".", "%2e"})
_DOUBLE_DOT = frozenset({"..", ".%2e", "%2e.", "%2e%2e"})

DEFAULT_PORTS: dict[str, int | None] = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
    "file": None,
}

URL_LIKE_PREFIXES = ("/", "./", "../")


@dataclass(frozen=True)
class UrlParts:
    """The five RFC 3986 components. ``None`` means the delimiter was absent."""

    scheme: str | None
    authority: str | None
    path: str
    query: str | None
    fragment: str | None

    def serialize(self) -> str:
        out: list[str] = []
        if self.scheme is not None:
            out.append(f"{self.scheme}:")
        if self.authority is not None:
            out.append(f"//{self.authority}")
        out.append(self.path)
        if self.query is not None:
            out.append(f"?{self.query}")
        if self.fragment is not None:
            out.append(f"#{self.fragment}")
        return "".join(out)


def split_url(value: str) -> UrlParts:
    """Split *value* into its components without validating them."""
    scheme: str | None = None
    rest = value
    match = _SCHEME_PATTERN.match(value)
    if match:
        scheme = match.group(1)
        rest = value[match.end() :]
    parts = _REFERENCE_PATTERN.match(rest)
    assert parts is not None  # the pattern accepts every string
    return UrlParts(
        scheme=scheme,
        authority=parts.group(2) if parts.group(1) is not None else None,
        path=parts.group(3),
        query=parts.group(5) if parts.group(4) is not None else None,
        fragment=parts.group(7) if parts.group(6) is not None else None,
    )


def remove_dot_segments(path: str) -> str:
    """Remove ``.`` and ``..`` segments (RFC 3986 Section 5.2.4).

    Percent-encoded forms (``%2e``, ``.%2E`` and so on) count as dot
    segments, as they do for browsers and Node.
    """
    segments = path.split("/")[1:] if path.startswith("/") else path.split("/")
    output: list[str] = []
    for segment in segments:
        folded = segment.lower()
        if folded in _SINGLE_DOT:
            continue
        if folded in _DOUBLE_DOT:
            if output:
                output.pop()
            continue
        output.append(segment)
    # A trailing dot segment still denotes a directory.
    if segments and segments[-1].lower() in _SINGLE_DOT | _DOUBLE_DOT:
        output.append("")
    result = "/".join(output)
    return f"/{result}" if path.startswith("/") else result


def _normalize_authority(scheme: str, authority: str) -> str | None:
    userinfo, at, hostport = authority.rpartition("@")
    host, port = hostport, ""
    if hostport.startswith("["):
        end = hostport.find("]")
        if end == -1:
            return None
        host, tail = hostport[: end + 1], hostport[end + 1 :]
        if tail and not tail.startswith(":"):
            return None
        port = tail[1:]
    elif ":" in hostport:
        host, _, port = hostport.partition(":")

    if port:
        if not (port.isascii() and port.isdigit()) or int(port) > 65535:
            return None
        if DEFAULT_PORTS.get(scheme) == int(port):
            port = ""
        else:
            port = str(int(port))
    if not host and scheme in DEFAULT_PORTS and scheme != "file":
        return None

    normalized = host.lower()
    if port:
        normalized = f"{normalized}:{port}"
    return f"{userinfo}{at}{normalized}"


def _normalize(parts: UrlParts) -> str | None:
    """Validate an absolute URL's components and return its serialization."""
    if parts.scheme is None:
        return None
    scheme = parts.scheme.lower()
    authority = parts.authority
    path = parts.path

    if scheme in DEFAULT_PORTS:
        if scheme == "file":
            authority = authority or ""
        elif not authority:
            return None

    if authority is not None:
        normalized_authority = _normalize_authority(scheme, authority)
        if normalized_authority is None:
            return None
        authority = normalized_authority
        if not path:
            path = "/"
        elif not path.startswith("/"):
            return None

    if path.startswith("/"):
        path = remove_dot_segments(path)

    return replace(parts, scheme=scheme, authority=authority, path=path).serialize()


def parse_url(value: str) -> str | None:
    """Parse *value* as an absolute URL.

    Returns the normalized serialization, or ``None`` if *value* has no
    valid scheme or contains whitespace/control characters.
    """
    if not value or _FORBIDDEN_PATTERN.search(value):
        return None
    return _normalize(split_url(value))


def join_url(reference: str, base: str) -> str | None:
    """Resolve *reference* against the absolute URL *base*.

    Returns ``None`` if *base* is not absolute, if *base* cannot serve as
    a base for a relative reference (``node:fs``, ``data:...``), or if
    the result is not a valid URL.
    """
    if _FORBIDDEN_PATTERN.search(reference):
        return None
    base_url = parse_url(base)
    if base_url is None:
        return None
    b = split_url(base_url)
    r = split_url(reference)

    if r.scheme is not None:
        return _normalize(r)

    if r.authority is not None:
        target = replace(r, scheme=b.scheme)
        return _normalize(target)

    if b.authority is None and not b.path.startswith("/"):
        return None

    if not r.path:
        query = r.query if r.query is not None else b.query
        target = UrlParts(b.scheme, b.authority, b.path, query, r.fragment)
    elif r.path.startswith("/"):
        target = UrlParts(b.scheme, b.authority, r.path, r.query, r.fragment)
    else:
        if b.authority is not None and not b.path:
            merged = f"/{r.path}"
        else:
            merged = b.path[: b.path.rfind("/") + 1] + r.path
        target = UrlParts(b.scheme, b.authority, merged, r.query, r.fragment)
    return _normalize(target)


def resolve_address(value: str, base: str) -> str | None:
    """Parse *value* as an absolute URL, falling back to resolving it against *base*."""
    absolute = parse_url(value)
    if absolute is not None:
        return absolute
    return join_url(value, base)


def is_url_like(value: str) -> bool:
    """Whether *value* is written as a relative URL reference (``/``, ``./``, ``../``)."""
    return value.startswith(URL_LIKE_PREFIXES)


def parse_url_like(specifier: str, base: str) -> str | None:
    """Interpret an import specifier as a URL, or return ``None`` for a bare specifier.

    Only absolute URLs and references starting with ``/``, ``./`` or ``../``
    count. ``lodash`` or ``@scope/pkg`` stay bare even though they are
    syntactically valid relative references.
    """
    if is_url_like(specifier):
        return join_url(specifier, base)
    return parse_url(specifier)


# ---------------------------------------------------------------------------
# Filesystem paths
# ---------------------------------------------------------------------------


def is_absolute_path(value: str) -> bool:
    """Whether *value* is an absolute POSIX or Windows filesystem path."""
    return PurePosixPath(value).is_absolute() or PureWindowsPath(value).is_absolute()


def to_url(path_or_url: str, *, cwd: str | None = None) -> str:
    """Convert a filesystem path or URL string to a serialized absolute URL.

    Precedence:

    1. An absolute filesystem path becomes a ``file:`` URL. This check
       runs first because ``C:\\src\\app.js`` also parses as a URL whose
       scheme is the drive letter.
    2. A valid absolute URL is returned normalized.
    3. Anything else is a path relative to *cwd* (default: the process
       working directory) and becomes a ``file:`` URL.

    A trailing path separator is preserved as a trailing ``/``.
    """
    trailing = path_or_url.endswith(("/", "\\"))

    if is_absolute_path(path_or_url):
        url = _path_as_uri(path_or_url)
    else:
        parsed = parse_url(path_or_url)
        if parsed is not None:
            return parsed
        root = cwd if cwd is not None else os.getcwd()
        absolute = os.path.abspath(os.path.join(root, path_or_url))
        url = _path_as_uri(absolute)

    normalized = parse_url(url)
    assert normalized is not None  # _path_as_uri() always yields a file URL
    if trailing and not normalized.endswith("/"):
        normalized = f"{normalized}/"
    return normalized


def _path_as_uri(path: str) -> str:
    if PurePosixPath(path).is_absolute():
        return "file://" + quote(str(PurePosixPath(path)))
    windows = PureWindowsPath(path)
    if windows.drive.endswith(":"):
        return f"file:///{windows.drive}" + quote(windows.as_posix()[2:])
    # UNC paths keep the server as the authority.
    return "file:" + quote(windows.as_posix())


def normalize_base_url(base: str, *, cwd: str | None = None) -> str:
    """Convert a base path or URL, treating existing directories as directories.

    Relative addresses in an import map resolve *inside* the base
    directory, so a directory path gains a trailing ``/``.
    """
    url = to_url(base, cwd=cwd)
    if url.endswith("/"):
        return url
    is_path = is_absolute_path(base) or parse_url(base) is None
    root = cwd if cwd is not None else os.getcwd()
    if is_path and os.path.isdir(os.path.join(root, base)):
        return f"{url}/"
    return url

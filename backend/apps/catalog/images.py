"""Image path helpers: normalization of catalog paths and the fallback chain
clients walk through when an image fails to load."""
import re
from typing import List
from urllib.parse import quote

# Characters left untouched by JavaScript's encodeURI / encodeURIComponent.
URI_SAFE = ";,/?:@&=+$-_.!~*'()#"
URI_COMPONENT_SAFE = "-_.!~*'()"

PLACEHOLDER_IMAGE = (
    'data:image/svg+xml,<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 400 300">'
    '<rect width="400" height="300" fill="%23f8fafc"/>'
    '<text x="200" y="150" text-anchor="middle" fill="%23999" font-size="16">'
    "Imagen no disponible</text></svg>"
)

_ABSOLUTE_URL = re.compile(r"^(https?:)?//", re.IGNORECASE)
_PERCENT_ESCAPE = re.compile(r"%[0-9A-Fa-f]{2}")
_LEADING_RELATIVE = re.compile(r"^\./|^/")


def encode_uri(value: str) -> str:
    return quote(value, safe=URI_SAFE)


def encode_uri_component(value: str) -> str:
    return quote(value, safe=URI_COMPONENT_SAFE)


def is_resolved_path(src: str) -> bool:
    """True for absolute URLs and anything that already names a folder."""
    return bool(
        _ABSOLUTE_URL.match(src)
        or src.startswith("/")
        or src.startswith("./")
        or "/" in src
    )


def resolve_image_path(src: str, image_dir: str = "imagenes") -> str:
    if not src or is_resolved_path(src):
        return src
    return f"{image_dir}/{encode_uri(src)}"


def safe_src(src: str) -> str:
    """Encode a path unless it already carries percent escapes."""
    if not src:
        return ""
    if _PERCENT_ESCAPE.search(src):
        return src
    return encode_uri(src)


def image_candidates(src: str, image_dir: str = "imagenes") -> List[str]:
    """Ordered, de-duplicated list of paths to try for ``src``.

    Covers the usual mismatches between catalog entries and files on disk:
    missing folder prefix, leading ``./`` or ``/`` and letter case.
    """
    if not src:
        return []
    plain = _LEADING_RELATIVE.sub("", src, count=1)
    lower = plain.lower()
    ordered = [
        safe_src(src),
        f"{image_dir}/{encode_uri(plain)}",
        f"./{image_dir}/{encode_uri(plain)}",
        encode_uri(plain),
        f"{image_dir}/{encode_uri(lower)}",
        encode_uri(lower),
    ]
    return list(dict.fromkeys(ordered))

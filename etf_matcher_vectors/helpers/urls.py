"""
Download URL construction for resources on the ETF Matcher data host.
"""

from etf_matcher_vectors.constants import BASE_URL, SYMBOL_MAP_FILENAME


def build_resource_url(relative_path: str) -> str:
    """
    Join a relative resource path onto BASE_URL.

    Exactly one "/" separates the base from the path whether or not the
    path starts with one. The path is not validated.

    Example:
        >>> build_resource_url("dataset.bin")
        'https://etfmatcher.com/data/dataset.bin'
    """
    return f"{BASE_URL.rstrip('/')}/{relative_path.lstrip('/')}"


def resolve_resource_url(path: str) -> str:
    """Return ``path`` unchanged if it is already an http(s) URL, else build one."""
    if path.startswith(("http://", "https://")):
        return path
    return build_resource_url(path)


def get_symbol_map_url() -> str:
    """Fully qualified URL of the ticker symbol map."""
    return build_resource_url(SYMBOL_MAP_FILENAME)

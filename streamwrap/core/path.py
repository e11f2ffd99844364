from ..errors import InvalidInput


def scheme_prefix(scheme: str) -> str:
    return f"{scheme}://"


def make_path(identifier: str, scheme: str) -> str:
    return scheme_prefix(scheme) + identifier


def parse_identifier(path: str, scheme: str) -> str:
    """
    Extract the identifier from a synthetic path.

    The identifier is everything after the fixed-length prefix, so it may
    itself contain '/' or '://'.
    """
    prefix = scheme_prefix(scheme)
    if not isinstance(path, str) or not path.startswith(prefix):
        raise InvalidInput(f"Path {path!r} is not a {prefix} path")
    return path[len(prefix):]

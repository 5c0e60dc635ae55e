from __future__ import annotations

from dataclasses import dataclass

import matplotlib

from .errors import UnsupportedHostVersionError


DEFAULT_MIN_HOST_VERSION = "3.5"


@dataclass(frozen=True)
class HostCompatibility:
    version: str
    accepted: bool
    warning: str | None


def parse_version(text: str) -> tuple[int, ...]:
    """Leading numeric release components of a version string ("3.8.0rc1" -> (3, 8, 0))."""
    parts: list[int] = []
    for piece in str(text).strip().split("."):
        digits = ""
        for ch in piece:
            if not ch.isdigit():
                break
            digits += ch
        if not digits:
            break
        parts.append(int(digits))
        if len(digits) != len(piece):
            break
    if not parts:
        raise ValueError(f"unparseable version string: {text!r}")
    return tuple(parts)


def host_version() -> str:
    return str(matplotlib.__version__)


def check_host_version(
    version: str | None = None,
    minimum: str = DEFAULT_MIN_HOST_VERSION,
) -> HostCompatibility:
    current = host_version() if version is None else version
    try:
        parsed = parse_version(current)
    except ValueError:
        return HostCompatibility(
            version=current,
            accepted=False,
            warning=f"unrecognized matplotlib version={current}",
        )
    floor = parse_version(minimum)
    width = max(len(parsed), len(floor))
    padded = parsed + (0,) * (width - len(parsed))
    padded_floor = floor + (0,) * (width - len(floor))
    if padded < padded_floor:
        return HostCompatibility(
            version=current,
            accepted=False,
            warning=f"matplotlib {current} is below the minimum supported version {minimum}",
        )
    return HostCompatibility(version=current, accepted=True, warning=None)


def require_supported_host(minimum: str = DEFAULT_MIN_HOST_VERSION) -> HostCompatibility:
    result = check_host_version(minimum=minimum)
    if not result.accepted:
        raise UnsupportedHostVersionError(
            f"matplotlib releases prior to {minimum} are not supported ({result.warning})"
        )
    return result

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias

from .errors import InvalidStyleError, TooManyStyleSetsError


@dataclass(frozen=True)
class StyleGroup:
    """One placeholder style: an optional matplotlib format string plus Line2D properties."""

    fmt: str | None = None
    properties: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.fmt is not None and not isinstance(self.fmt, str):
            raise InvalidStyleError(f"format must be a string, got {type(self.fmt).__name__}")
        if not isinstance(self.properties, Mapping):
            raise InvalidStyleError("style properties must be a mapping")
        for key in self.properties:
            if not isinstance(key, str):
                raise InvalidStyleError(f"style property names must be strings, got {key!r}")
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def plot_args(self) -> tuple[str, ...]:
        return () if self.fmt is None else (self.fmt,)

    def plot_kwargs(self) -> dict[str, Any]:
        return dict(self.properties)


DEFAULT_STYLE = StyleGroup()


@dataclass(frozen=True)
class NoStyle:
    pass


@dataclass(frozen=True)
class OneStyleGroup:
    group: StyleGroup


@dataclass(frozen=True)
class ManyStyleGroups:
    groups: tuple[StyleGroup, ...]


StyleSelection: TypeAlias = NoStyle | OneStyleGroup | ManyStyleGroups


def normalize_style(*style: Any, **style_kwargs: Any) -> StyleSelection:
    """Decide which of the accepted placeholder style forms the caller used.

    Accepted forms:
      - nothing                                 -> NoStyle
      - flat: ``"r--"``, ``"r--", lw=2``, ``lw=2`` -> OneStyleGroup
      - one group: StyleGroup, dict, ``(fmt, dict)`` -> OneStyleGroup
      - several groups in a single list/tuple    -> ManyStyleGroups
    """
    if not style and not style_kwargs:
        return NoStyle()

    if len(style) == 1 and not isinstance(style[0], str):
        only = style[0]
        if _is_group(only):
            return OneStyleGroup(_merge(_coerce_group(only), style_kwargs))
        if isinstance(only, (list, tuple)):
            if style_kwargs:
                raise InvalidStyleError("keyword properties cannot be combined with several style groups")
            if not only:
                return NoStyle()
            return ManyStyleGroups(tuple(_coerce_group(item) for item in only))
        raise InvalidStyleError(f"unsupported style parameter: {only!r}")

    if len(style) > 1:
        raise InvalidStyleError(
            f"expected at most one format string in a flat style, got {len(style)} positional parameters"
        )
    fmt = style[0] if style else None
    return OneStyleGroup(StyleGroup(fmt=fmt, properties=style_kwargs))


def expand(selection: StyleSelection, count: int, *, operation: str | None = None) -> list[StyleGroup]:
    """Exactly ``count`` style groups, one per placeholder entry."""
    if count < 0:
        raise ValueError("count must be >= 0")
    if isinstance(selection, NoStyle):
        return [DEFAULT_STYLE] * count
    if isinstance(selection, OneStyleGroup):
        return [selection.group] * count
    groups = list(selection.groups)
    if len(groups) > count:
        raise TooManyStyleSetsError(
            f"{len(groups)} style groups specified for {count} new entries",
            operation=operation,
        )
    if len(groups) == 1:
        return groups * count
    return groups + [DEFAULT_STYLE] * (count - len(groups))


def _is_group(value: Any) -> bool:
    if isinstance(value, (StyleGroup, Mapping)):
        return True
    return (
        isinstance(value, tuple)
        and len(value) == 2
        and (value[0] is None or isinstance(value[0], str))
        and isinstance(value[1], Mapping)
    )


def _coerce_group(value: Any) -> StyleGroup:
    if isinstance(value, StyleGroup):
        return value
    if isinstance(value, str):
        return StyleGroup(fmt=value)
    if isinstance(value, Mapping):
        return StyleGroup(properties=value)
    if _is_group(value):
        return StyleGroup(fmt=value[0], properties=value[1])
    raise InvalidStyleError(f"unsupported style group: {value!r}")


def _merge(group: StyleGroup, extra: Mapping[str, Any]) -> StyleGroup:
    if not extra:
        return group
    merged = dict(group.properties)
    merged.update(extra)
    return StyleGroup(fmt=group.fmt, properties=merged)

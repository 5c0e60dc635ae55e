from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
from numbers import Integral
from typing import Any

from matplotlib.legend import Legend

from . import backend
from .config import LegtoolsConfig
from .entries import align
from .errors import (
    EmptyStringInputError,
    EntryCountMismatchError,
    IndexCountMismatchError,
    IndexOutOfRangeError,
    NonUniqueIndicesError,
)
from .handles import resolve_legend
from .placeholder import create_placeholders
from .styles import expand, normalize_style
from .version import require_supported_host


LOGGER = logging.getLogger(__name__)


class LegendEditor:
    """Edits the entries of an existing matplotlib axes legend.

    Each edit validates its inputs, then rebuilds the legend once with the new
    strings and plot children. The returned legend is the live one; earlier
    handles keep resolving to it.

    Methods:
        append          - add entries for axes artists the legend does not list yet
        permute         - rearrange the entries
        remove          - remove entries, deleting the legend when none remain
        add_placeholder - add entries backed by data-free placeholder series
    """

    def __init__(self, config: LegtoolsConfig | None = None) -> None:
        self.config = config or LegtoolsConfig()

    def append(self, legend: Legend | Sequence[Legend], new_entries: str | Sequence[str]) -> Legend:
        """Append ``new_entries`` to the legend.

        Artists already listed keep their order; artists of the axes that the
        legend does not list yet follow in draw order and receive the new strings.
        Surplus strings (or surplus artists) are dropped unless ``strict_append``
        is configured.
        """
        lh = self._prepare(legend, "append")
        strings = _coerce_strings(new_entries, "append")
        return self._append(lh, strings)

    def permute(self, legend: Legend | Sequence[Legend], order: Sequence[int]) -> Legend:
        lh = self._prepare(legend, "permute")
        entries = backend.read_entries(lh)
        indices = _coerce_indices(order, "permute")
        if len(indices) != len(entries):
            raise IndexCountMismatchError(
                "Number of values in order must match the number of legend strings",
                operation="permute",
            )
        if len(set(indices)) < len(entries):
            raise NonUniqueIndicesError(
                "order must contain enough unique indices to index all legend strings",
                operation="permute",
            )
        _check_range(indices, len(entries), "permute")
        return backend.commit(lh, entries.permuted(indices))

    def remove(self, legend: Legend | Sequence[Legend], indices: Sequence[int]) -> Legend | None:
        """Remove the entries at ``indices``.

        Placeholder series behind removed entries are removed from the axes. When
        every entry is removed the legend itself is deleted and ``None`` returned.
        """
        lh = self._prepare(legend, "remove")
        entries = backend.read_entries(lh)
        remidx = _coerce_indices(indices, "remove")
        unique = set(remidx)
        if len(unique) > len(entries):
            raise IndexCountMismatchError(
                "Number of unique values in indices must not exceed the number of legend entries",
                operation="remove",
            )
        _check_range(remidx, len(entries), "remove")
        if not unique:
            return lh

        placeholders = entries.placeholders(unique, self.config.placeholder_tag)
        if len(unique) == len(entries):
            backend.delete(lh)
            if self.config.warn_on_full_removal:
                LOGGER.warning(
                    "legtools:remove:LegendDeleted All legend entries specified for removal, deleting Legend object"
                )
            _remove_artists(placeholders)
            return None

        # Shrink the legend before deleting placeholders so the rebuild never sees a removed artist.
        rebuilt = backend.commit(lh, entries.without(unique))
        _remove_artists(placeholders)
        return rebuilt

    def add_placeholder(
        self,
        legend: Legend | Sequence[Legend],
        new_entries: str | Sequence[str],
        *style: Any,
        **style_kwargs: Any,
    ) -> Legend:
        """Add entries backed by NaN-only line series tagged as placeholders.

        One placeholder series is created per string. ``style`` takes a flat
        format/properties style, one pre-grouped style, or a list of groups (one
        per string); see :func:`legtools.styles.normalize_style`.
        """
        lh = self._prepare(legend, "add_placeholder")
        strings = _coerce_strings(new_entries, "add_placeholder")
        groups = expand(normalize_style(*style, **style_kwargs), len(strings), operation="add_placeholder")
        ax = backend.legend_axes(lh)
        assert ax is not None
        created = create_placeholders(ax, strings, groups, self.config.placeholder_tag)
        try:
            return self._append(lh, strings)
        except Exception:
            _remove_artists(created)
            raise

    def _prepare(self, legend: Any, operation: str) -> Legend:
        require_supported_host(self.config.min_host_version)
        return resolve_legend(legend, operation)

    def _append(self, lh: Legend, strings: list[str]) -> Legend:
        entries = backend.read_entries(lh)
        ax = backend.legend_axes(lh)
        assert ax is not None
        children, kept_strings = entries.reconcile(backend.axes_plot_children(ax))
        combined = list(kept_strings) + strings
        if self.config.strict_append and len(combined) != len(children):
            raise EntryCountMismatchError(
                f"{len(combined)} legend strings for {len(children)} plotted series",
                operation="append",
            )
        aligned, dropped = align(combined, children)
        if dropped:
            LOGGER.debug(
                "append dropped %d surplus item(s): %d strings, %d plotted series",
                dropped,
                len(combined),
                len(children),
            )
        return backend.commit(lh, aligned)


def _coerce_strings(value: Any, operation: str) -> list[str]:
    if value is None:
        raise EmptyStringInputError("No strings provided", operation=operation)
    if isinstance(value, str):
        if not value:
            raise EmptyStringInputError("No strings provided", operation=operation)
        return [value]
    flat = list(_flatten(value, operation))
    if not flat:
        raise EmptyStringInputError("No strings provided", operation=operation)
    return flat


def _flatten(value: Any, operation: str):
    if isinstance(value, str):
        yield value
        return
    if not isinstance(value, (list, tuple)):
        raise EmptyStringInputError(
            f"strings must be a str or a sequence of str, got {type(value).__name__}",
            operation=operation,
        )
    for item in value:
        yield from _flatten(item, operation)


def _coerce_indices(value: Any, operation: str) -> list[int]:
    if isinstance(value, Integral) and not isinstance(value, bool):
        return [int(value)]
    if value is None or not isinstance(value, Iterable):
        raise IndexOutOfRangeError("indices must be a sequence of integers", operation=operation)
    out: list[int] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, Integral):
            raise IndexOutOfRangeError(f"indices must be integers, got {item!r}", operation=operation)
        out.append(int(item))
    return out


def _check_range(indices: Sequence[int], count: int, operation: str) -> None:
    for i in indices:
        if i < 0 or i >= count:
            raise IndexOutOfRangeError(
                f"index {i} is out of range for a legend with {count} entries",
                operation=operation,
            )


def _remove_artists(artists: Sequence[Any]) -> None:
    for artist in artists:
        artist.remove()


_DEFAULT_EDITOR = LegendEditor()


def append(legend: Legend | Sequence[Legend], new_entries: str | Sequence[str]) -> Legend:
    return _DEFAULT_EDITOR.append(legend, new_entries)


def permute(legend: Legend | Sequence[Legend], order: Sequence[int]) -> Legend:
    return _DEFAULT_EDITOR.permute(legend, order)


def remove(legend: Legend | Sequence[Legend], indices: Sequence[int]) -> Legend | None:
    return _DEFAULT_EDITOR.remove(legend, indices)


def add_placeholder(
    legend: Legend | Sequence[Legend],
    new_entries: str | Sequence[str],
    *style: Any,
    **style_kwargs: Any,
) -> Legend:
    return _DEFAULT_EDITOR.add_placeholder(legend, new_entries, *style, **style_kwargs)

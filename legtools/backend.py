from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, TypeAlias

import matplotlib as mpl
from matplotlib import colors as mcolors
from matplotlib.axes import Axes
from matplotlib.collections import Collection
from matplotlib.container import Container
from matplotlib.legend import Legend
from matplotlib.lines import Line2D
from matplotlib.offsetbox import TextArea
from matplotlib.patches import Patch

from .entries import LegendEntries


LOGGER = logging.getLogger(__name__)

PLOT_CHILDREN_ATTR = "_legtools_plot_children"
SUCCESSOR_ATTR = "_legtools_successor"
NO_LEGEND_LABEL = "_nolegend_"

RGBA: TypeAlias = tuple[float, float, float, float]

_SPACING_ATTRS = (
    "numpoints",
    "markerscale",
    "scatterpoints",
    "shadow",
    "borderpad",
    "labelspacing",
    "handlelength",
    "handleheight",
    "handletextpad",
    "borderaxespad",
    "columnspacing",
)


@dataclass(frozen=True)
class LegendProps:
    """Presentation state of a legend, replayed when the legend is rebuilt."""

    kwargs: dict[str, Any] = field(default_factory=dict)
    visible: bool = True
    zorder: float = 5.0
    draggable: bool = False
    boxstyle: Any = None
    label_colors: dict[int, RGBA] = field(default_factory=dict)
    labels_follow_handles: bool = False
    uniform_label_color: RGBA | None = None

    @classmethod
    def capture(cls, legend: Legend, entries: LegendEntries | None = None) -> "LegendProps":
        kwargs: dict[str, Any] = {}
        loc = getattr(legend, "_loc", None)
        if loc is not None:
            kwargs["loc"] = loc
        anchor = getattr(legend, "_bbox_to_anchor", None)
        if anchor is not None:
            kwargs["bbox_to_anchor"] = anchor
        if hasattr(legend, "_ncols"):
            kwargs["ncols"] = legend._ncols
        elif hasattr(legend, "_ncol"):
            kwargs["ncol"] = legend._ncol
        mode = getattr(legend, "_mode", None)
        if mode is not None:
            kwargs["mode"] = mode
        if hasattr(legend, "get_alignment"):
            kwargs["alignment"] = legend.get_alignment()
        markerfirst = _markerfirst(legend)
        if markerfirst is not None:
            kwargs["markerfirst"] = markerfirst
        kwargs["frameon"] = legend.get_frame_on()
        frame = legend.get_frame()
        kwargs["facecolor"] = frame.get_facecolor()
        kwargs["edgecolor"] = frame.get_edgecolor()
        if frame.get_alpha() is not None:
            kwargs["framealpha"] = frame.get_alpha()
        kwargs["prop"] = legend.prop.copy()
        title = legend.get_title()
        if title.get_text():
            kwargs["title"] = title.get_text()
            kwargs["title_fontsize"] = title.get_fontsize()
        for name in _SPACING_ATTRS:
            if hasattr(legend, name):
                kwargs[name] = getattr(legend, name)
        handler_map = getattr(legend, "_custom_handler_map", None)
        if handler_map:
            kwargs["handler_map"] = dict(handler_map)
        draggable = legend.get_draggable() if hasattr(legend, "get_draggable") else False

        colors = [mcolors.to_rgba(text.get_color()) for text in legend.get_texts()]
        children = entries.plot_children if entries is not None else ()
        label_colors = {id(child): color for child, color in zip(children, colors)}
        follows = (
            bool(colors)
            and len(children) == len(colors)
            and all(_artist_rgba(child) == color for child, color in zip(children, colors))
            and any(color != _default_label_rgba() for color in colors)
        )
        uniform = colors[0] if colors and all(color == colors[0] for color in colors) else None
        return cls(
            kwargs=kwargs,
            visible=legend.get_visible(),
            zorder=legend.get_zorder(),
            draggable=bool(draggable),
            boxstyle=frame.get_boxstyle(),
            label_colors=label_colors,
            labels_follow_handles=follows,
            uniform_label_color=uniform,
        )

    def apply(self, legend: Legend, entries: LegendEntries) -> None:
        legend.set_visible(self.visible)
        legend.set_zorder(self.zorder)
        if self.boxstyle is not None:
            legend.get_frame().set_boxstyle(self.boxstyle)
        if self.draggable:
            legend.set_draggable(True)
        for text, child in zip(legend.get_texts(), entries.plot_children):
            color = self.label_colors.get(id(child))
            if color is None and self.labels_follow_handles:
                color = _artist_rgba(child)
            if color is None:
                color = self.uniform_label_color
            if color is not None:
                text.set_color(color)


def _markerfirst(legend: Legend) -> bool | None:
    # Each entry box holds [handle, text] when markers come first, [text, handle] otherwise.
    try:
        column = legend._legend_handle_box.get_children()[0]
        first = column.get_children()[0].get_children()[0]
    except (AttributeError, IndexError):
        return None
    return not isinstance(first, TextArea)


def _default_label_rgba() -> RGBA | None:
    value = mpl.rcParams["legend.labelcolor"]
    if not mcolors.is_color_like(value):
        value = mpl.rcParams["text.color"]
    try:
        return mcolors.to_rgba(value)
    except ValueError:
        return None


def _artist_rgba(artist: object) -> RGBA | None:
    key = _style_key(artist)
    return None if key is None else key[1]


def _style_key(artist: object) -> tuple[Any, ...] | None:
    """(kind, rgba, ...) describing how ``artist`` looks in a legend, if known."""
    try:
        if isinstance(artist, Container):
            members = artist.get_children()
            return _style_key(members[0]) if members else None
        if isinstance(artist, Line2D):
            return ("line", mcolors.to_rgba(artist.get_color()), artist.get_linestyle(), artist.get_marker())
        if isinstance(artist, Patch):
            return ("patch", mcolors.to_rgba(artist.get_facecolor()))
        if isinstance(artist, Collection):
            faces = artist.get_facecolor()
            if len(faces) == 0:
                return None
            return ("collection", mcolors.to_rgba(faces[0]))
    except ValueError:
        return None
    return None


def _looks_like(artist: object, proxy: object | None) -> bool:
    """False only when ``proxy`` was certainly drawn from a differently styled artist."""
    if proxy is None:
        return True
    mine, theirs = _style_key(artist), _style_key(proxy)
    if mine is None or theirs is None or mine[0] != theirs[0]:
        return True
    if mine[1] != theirs[1]:
        return False
    if mine[0] == "line":
        if mine[2] != theirs[2]:
            return False
        if theirs[3] not in ("None", "none", "", " ", None) and mine[3] != theirs[3]:
            return False
    return True


def legend_axes(legend: Legend) -> Axes | None:
    if not getattr(legend, "isaxes", False):
        return None
    return legend.axes


def is_live(legend: Legend) -> bool:
    ax = legend_axes(legend)
    return ax is not None and ax.get_legend() is legend


def successor(legend: Legend) -> Legend | None:
    return getattr(legend, SUCCESSOR_ATTR, None)


def legend_strings(legend: Legend) -> tuple[str, ...]:
    return tuple(text.get_text() for text in legend.get_texts())


def axes_plot_children(ax: Axes) -> list[object]:
    """Legend-able artists of ``ax`` in creation order.

    Artists owned by a container (bars, errorbars, stems) are represented by the
    container, placed where its first member was drawn. Artists labelled
    ``_nolegend_`` are left out; auto-labelled ones (``_child0``) are kept.
    """
    plottable = {id(a) for group in (ax.lines, ax.patches, ax.collections) for a in group}
    owner: dict[int, object] = {}
    for container in ax.containers:
        for member in container.get_children():
            owner.setdefault(id(member), container)

    ordered: list[object] = []
    emitted: set[int] = set()
    for artist in ax.get_children():
        if id(artist) not in plottable:
            continue
        if not isinstance(artist, (Line2D, Patch, Collection)):
            continue
        item = owner.get(id(artist), artist)
        if id(item) in emitted:
            continue
        emitted.add(id(item))
        if _label_of(item) != NO_LEGEND_LABEL:
            ordered.append(item)
    for container in ax.containers:
        if id(container) not in emitted:
            emitted.add(id(container))
            if _label_of(container) != NO_LEGEND_LABEL:
                ordered.append(container)
    return ordered


def read_entries(legend: Legend) -> LegendEntries:
    strings = legend_strings(legend)
    tracked = getattr(legend, PLOT_CHILDREN_ATTR, None)
    if tracked is not None and len(tracked) == len(strings):
        return LegendEntries(strings=strings, plot_children=tuple(tracked))
    ax = legend_axes(legend)
    candidates = axes_plot_children(ax) if ax is not None else []
    children = _match_children(strings, candidates, _proxy_handles(legend))
    return LegendEntries(strings=strings, plot_children=children)


def _proxy_handles(legend: Legend) -> list[object]:
    handles = getattr(legend, "legend_handles", None)
    if handles is None:
        handles = getattr(legend, "legendHandles", [])
    return list(handles)


def _match_children(
    strings: tuple[str, ...],
    candidates: list[object],
    proxies: list[object],
) -> tuple[object, ...]:
    # A label match only counts when the legend's own handle was drawn from a look-alike;
    # bare label lists pair with artists positionally. Entries still unmatched were
    # drawn from proxy artists outside the axes.
    def proxy_at(index: int) -> object | None:
        return proxies[index] if index < len(proxies) else None

    used: set[int] = set()
    matched: list[object | None] = [None] * len(strings)
    for index, text in enumerate(strings):
        for artist in candidates:
            if id(artist) in used or _label_of(artist) != text:
                continue
            if _looks_like(artist, proxy_at(index)):
                matched[index] = artist
                used.add(id(artist))
                break

    for index in range(len(strings)):
        if matched[index] is not None:
            continue
        for artist in candidates:
            if id(artist) not in used and _looks_like(artist, proxy_at(index)):
                matched[index] = artist
                used.add(id(artist))
                break

    return tuple(item if item is not None else proxy_at(index) for index, item in enumerate(matched))


def _label_of(artist: object) -> str | None:
    get_label = getattr(artist, "get_label", None)
    if get_label is None:
        return None
    label = get_label()
    return None if label is None else str(label)


def commit(legend: Legend, entries: LegendEntries) -> Legend:
    """Rebuild ``legend`` on its axes with ``entries`` as one update."""
    ax = legend_axes(legend)
    if ax is None:
        raise ValueError("legend is not attached to an axes")
    props = LegendProps.capture(legend, read_entries(legend))
    legend.remove()
    rebuilt = ax.legend(list(entries.plot_children), list(entries.strings), **props.kwargs)
    props.apply(rebuilt, entries)
    setattr(rebuilt, PLOT_CHILDREN_ATTR, entries.plot_children)
    setattr(legend, SUCCESSOR_ATTR, rebuilt)
    LOGGER.debug("legend rebuilt with %d entries", len(entries))
    return rebuilt


def delete(legend: Legend) -> None:
    legend.remove()
    setattr(legend, SUCCESSOR_ATTR, None)

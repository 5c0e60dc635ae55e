from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
import logging

from matplotlib.axes import Axes
from matplotlib.lines import Line2D
import numpy as np

from .styles import StyleGroup


LOGGER = logging.getLogger(__name__)


@contextmanager
def hold(ax: Axes) -> Iterator[None]:
    """Keep the current view while placeholders are plotted, then restore autoscaling."""
    prior_x = ax.get_autoscalex_on()
    prior_y = ax.get_autoscaley_on()
    ax.set_autoscale_on(False)
    try:
        yield
    finally:
        ax.set_autoscalex_on(prior_x)
        ax.set_autoscaley_on(prior_y)


def create_placeholder(ax: Axes, label: str, style: StyleGroup, tag: str) -> Line2D:
    kwargs = style.plot_kwargs()
    kwargs["label"] = label
    kwargs["gid"] = tag
    (line,) = ax.plot([np.nan], [np.nan], *style.plot_args(), **kwargs)
    return line


def create_placeholders(
    ax: Axes,
    labels: Sequence[str],
    styles: Sequence[StyleGroup],
    tag: str,
) -> list[Line2D]:
    if len(labels) != len(styles):
        raise ValueError(f"labels and styles must align: {len(labels)} != {len(styles)}")
    created: list[Line2D] = []
    with hold(ax):
        try:
            for label, style in zip(labels, styles):
                created.append(create_placeholder(ax, label, style, tag))
        except Exception:
            for line in created:
                line.remove()
            raise
    LOGGER.debug("created %d placeholder series tagged %s", len(created), tag)
    return created


def is_placeholder(artist: object, tag: str) -> bool:
    get_gid = getattr(artist, "get_gid", None)
    return get_gid is not None and get_gid() == tag


def count_placeholders(ax: Axes, tag: str) -> int:
    return sum(1 for line in ax.lines if is_placeholder(line, tag))

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class LegendEntries:
    """Index-aligned display strings and the plot children they describe."""

    strings: tuple[str, ...] = ()
    plot_children: tuple[object, ...] = ()

    def __post_init__(self) -> None:
        if len(self.strings) != len(self.plot_children):
            raise ValueError(
                f"legend strings and plot children must align: {len(self.strings)} != {len(self.plot_children)}"
            )

    def __len__(self) -> int:
        return len(self.strings)

    def reconcile(self, axes_children: Sequence[object]) -> tuple[tuple[object, ...], tuple[str, ...]]:
        """Children ordered as the legend shows them, followed by unlisted axes children.

        Returns the reconciled children and the strings of the entries that survive
        (entries whose child left the axes are dropped).
        """
        present = {id(child) for child in axes_children}
        kept_children: list[object] = []
        kept_strings: list[str] = []
        for text, child in zip(self.strings, self.plot_children):
            if id(child) in present:
                kept_children.append(child)
                kept_strings.append(text)
        listed = {id(child) for child in kept_children}
        extra = [child for child in axes_children if id(child) not in listed]
        return tuple(kept_children) + tuple(extra), tuple(kept_strings)

    def permuted(self, order: Sequence[int]) -> "LegendEntries":
        return LegendEntries(
            strings=tuple(self.strings[i] for i in order),
            plot_children=tuple(self.plot_children[i] for i in order),
        )

    def without(self, indices: Iterable[int]) -> "LegendEntries":
        dropped = set(indices)
        keep = [i for i in range(len(self)) if i not in dropped]
        return LegendEntries(
            strings=tuple(self.strings[i] for i in keep),
            plot_children=tuple(self.plot_children[i] for i in keep),
        )

    def placeholders(self, indices: Iterable[int], tag: str) -> list[object]:
        found: list[object] = []
        for i in sorted(set(indices)):
            child = self.plot_children[i]
            get_gid = getattr(child, "get_gid", None)
            if get_gid is not None and get_gid() == tag:
                found.append(child)
        return found


def align(strings: Sequence[str], children: Sequence[object]) -> tuple[LegendEntries, int]:
    """Pair strings with children, dropping whichever side has surplus.

    Returns the aligned entries and the number of dropped items.
    """
    count = min(len(strings), len(children))
    dropped = max(len(strings), len(children)) - count
    return LegendEntries(strings=tuple(strings[:count]), plot_children=tuple(children[:count])), dropped

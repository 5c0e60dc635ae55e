from __future__ import annotations

import logging

from matplotlib.legend import Legend

from .backend import is_live, successor
from .errors import InvalidLegendHandleError


LOGGER = logging.getLogger(__name__)


def resolve_legend(candidate: object, operation: str) -> Legend:
    """Live legend addressed by ``candidate``.

    A sequence of legends is reduced to its first item with a warning. Handles
    superseded by an earlier edit are followed to the legend that replaced them.
    """
    if isinstance(candidate, (list, tuple)):
        if not candidate:
            raise InvalidLegendHandleError("Invalid legend handle provided", operation=operation)
        if len(candidate) > 1:
            LOGGER.warning(
                "legtools:%s:TooManyLegends %d Legend objects specified, modifying the first one only",
                operation,
                len(candidate),
            )
        candidate = candidate[0]

    if not isinstance(candidate, Legend):
        raise InvalidLegendHandleError("Invalid legend handle provided", operation=operation)

    legend = candidate
    seen: set[int] = set()
    while not is_live(legend):
        nxt = successor(legend)
        if nxt is None or id(nxt) in seen:
            break
        seen.add(id(legend))
        legend = nxt

    if not getattr(legend, "isaxes", False):
        raise InvalidLegendHandleError("Figure-level legends are not supported", operation=operation)
    if not is_live(legend):
        raise InvalidLegendHandleError("Legend object has been deleted", operation=operation)
    return legend

from legtools.config import LegtoolsConfig, load_config
from legtools.entries import LegendEntries
from legtools.errors import (
    EmptyStringInputError,
    EntryCountMismatchError,
    IndexCountMismatchError,
    IndexOutOfRangeError,
    InvalidLegendHandleError,
    InvalidStyleError,
    LegtoolsError,
    NonUniqueIndicesError,
    TooManyStyleSetsError,
    UnsupportedHostVersionError,
)
from legtools.styles import StyleGroup
from legtools.tools import LegendEditor, add_placeholder, append, permute, remove
from legtools.version import HostCompatibility, check_host_version

__version__ = "0.1.0"
__all__ = [
    "EmptyStringInputError",
    "EntryCountMismatchError",
    "HostCompatibility",
    "IndexCountMismatchError",
    "IndexOutOfRangeError",
    "InvalidLegendHandleError",
    "InvalidStyleError",
    "LegendEditor",
    "LegendEntries",
    "LegtoolsConfig",
    "LegtoolsError",
    "NonUniqueIndicesError",
    "StyleGroup",
    "TooManyStyleSetsError",
    "UnsupportedHostVersionError",
    "add_placeholder",
    "append",
    "check_host_version",
    "load_config",
    "permute",
    "remove",
]

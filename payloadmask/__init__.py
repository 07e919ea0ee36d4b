"""
payloadmask - Rule-based masks for payload tagging

Compiles a compact rule language (comma-separated dotted paths, `-` for
exclusion, `*` wildcards) into an immutable tree, and walks decoded JSON
documents with lightweight cursors to decide which values may be tagged.
"""

from .mask import Mask, Cursor
from .masker import Masker, get_masked_object
from .compiler import RuleCompiler
from .models import (
    MaskNode,
    MaskConfig,
    LogLevel,
    Wildcard,
)
from .config import load_config, config_from_dict
from .jsonpath_utils import JSONPathMatcher
from .exceptions import (
    PayloadMaskError,
    ConfigError,
    PayloadDecodeError,
    RuleError,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "Mask",
    "Cursor",
    "RuleCompiler",
    "MaskNode",
    "Wildcard",
    # Masking
    "Masker",
    "get_masked_object",
    "JSONPathMatcher",
    # Config
    "MaskConfig",
    "LogLevel",
    "load_config",
    "config_from_dict",
    # Errors
    "PayloadMaskError",
    "ConfigError",
    "PayloadDecodeError",
    "RuleError",
]

"""Runnable usage examples for ``lib_object_mapper``."""

from .custom_configuration import run_custom_configuration
from .simple import run_simple

EXAMPLES = {
    "simple": run_simple,
    "custom-configuration": run_custom_configuration,
}

__all__ = ["EXAMPLES", "run_custom_configuration", "run_simple"]

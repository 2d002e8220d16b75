"""Loading of pluggable solver and graph builder implementations.

Both are named in settings as ``"package.module:attribute"``. The attribute
may be a class or a zero-argument factory; either is called once. An
attribute that already provides the required method is used as is.
"""

import logging
from importlib import import_module
from typing import Any

from .errors import PluginError

_logging = logging.getLogger(__name__)


def load_object(spec: str) -> Any:
    """Import the object named by a "module:attribute" spec."""
    module_name, sep, attr_path = spec.partition(":")
    if not sep or not module_name or not attr_path:
        raise PluginError(f"Invalid plugin spec '{spec}': expected 'module:attribute'")

    try:
        target: Any = import_module(module_name)
    except ImportError as e:
        raise PluginError(f"Cannot import plugin module '{module_name}': {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise PluginError(f"Plugin module '{module_name}' has no attribute '{attr_path}'") from e
    return target


def load_plugin(spec: str | None, method: str, role: str) -> Any:
    """Load and instantiate a plugin that must provide ``method``."""
    if not spec:
        raise PluginError(
            f"No {role} configured. Set '{role.replace(' ', '_')}' in the settings file "
            f"or pass --{role.replace(' ', '-')}"
        )

    obj = load_object(spec)
    if not callable(getattr(obj, method, None)) or isinstance(obj, type):
        if not callable(obj):
            raise PluginError(f"{role.capitalize()} '{spec}' is not callable")
        obj = obj()

    if not callable(getattr(obj, method, None)):
        raise PluginError(f"{role.capitalize()} '{spec}' does not provide {method}()")

    _logging.debug(f"Loaded {role} from {spec}")
    return obj


def load_solver(spec: str | None):
    return load_plugin(spec, "solve", "solver")


def load_graph_builder(spec: str | None):
    return load_plugin(spec, "graph_from_cache", "graph builder")


__all__ = ["load_object", "load_plugin", "load_solver", "load_graph_builder"]

import inspect
from typing import Any


def describe_token(dependency_type: Any) -> str:
    """Human readable name for a dependency token."""
    if inspect.isclass(dependency_type):
        return dependency_type.__name__
    return repr(dependency_type)

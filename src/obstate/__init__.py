"""obstate: an explicit-subscription reactive state cell for Python."""

from importlib.metadata import version as _version

__version__ = _version("obstate")

from obstate.state import State
from obstate.observer import Observer, UseAfterDestroy, Callback, Disposer
# textual NOT auto-imported — opt-in only

__all__ = [
    "State",
    "Observer",
    "UseAfterDestroy",
    "Callback",
    "Disposer",
]

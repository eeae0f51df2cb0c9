"""Textual integration for obstate. Opt-in — requires textual.

Guard, NoMatches handling and thread marshaling live here so callers can
hand plain widget-updating callbacks to an Observer. Pause state is owned
by this module and keyed by id(app); nothing is stored on the app.
"""

import logging
import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

logger = logging.getLogger("obstate.textual")

# Module-owned pause state — keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend guarded callbacks during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def _guard(app, fn):
    _main = threading.get_ident()

    def _safe():
        try:
            fn()
        except NoMatches:
            logger.debug("Dropped notification for %r: widget not mounted", fn)

    def _guarded():
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe)
        else:
            _safe()

    return _guarded


def on_change(app, observer, fn):
    """observer.on_change() that safely bridges to Textual widgets.

    Skips while the app is paused or not running, swallows NoMatches from
    widget queries, and marshals calls from other threads via
    call_from_thread. Returns the observer's disposer.
    """
    return observer.on_change(_guard(app, fn))


def on_bind(app, observer, fn):
    """observer.on_bind() with the same guards as on_change()."""
    return observer.on_bind(_guard(app, fn))

"""
Logging bootstrap for applications built on burrow.

Library modules only log through logging.getLogger(__name__) at debug level
(resolution steps, command module loading, dispatch). Applications that want to
see those records call configure_logging() once at startup.
"""
import logging

from rich.logging import RichHandler


def configure_logging(level=logging.INFO, /):
    """
    Attach a rich handler to the root logger once.

    Calling it again only updates the level; existing handlers are kept so
    embedding applications are not disrupted.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if not any(isinstance(handler, RichHandler) for handler in root.handlers):
        root.addHandler(RichHandler(show_path=False, markup=False))


__all__ = (
    "configure_logging",
)

import logging
import sys

_THIRD_PARTY_LOGGERS = ("markdown_it", "yaml")


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Route log records to stderr; stdout carries the tables and JSON.

    ``quiet`` keeps only warnings (stale preference stores, unreadable files)
    and wins over ``verbose``.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)

    for name in _THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if level == logging.DEBUG else logging.WARNING)

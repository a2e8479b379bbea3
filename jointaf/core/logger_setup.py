#!/usr/bin/env python

"""Logger for jointaf to STDERR and optionally to a LOGFILE.

logging to STDERR
-----------------
DEBUG: per-site priors, P(D|AF) and posterior summaries.
INFO: batch summaries reported to users. (DEFAULT)
WARNING: warnings to users.
ERROR: sometimes printed along with raised errors.

Examples
--------
>>> import jointaf
>>> jointaf.set_log_level("DEBUG")
>>> jointaf.set_log_level("DEBUG", log_file="/tmp/jointaf-log.txt")

Note
----
Exceptions written to the logfile have color support, which
can be viewed using `less -R logfile.txt`
"""

from typing import Optional, List, Iterator
import sys
from pathlib import Path
from contextlib import contextmanager
from loguru import logger
import IPython

LOGGERS = [0]


def formatter(record):
    """Custom formatter with time, level and source file."""
    end = record["extra"].get("end", "\n")
    fmessage = (
        "{time:hh:mm:ss} | "
        "<level>{level:<8}</level> <white>|</white> "
        "<magenta>{file:<18}</magenta> <white>|</white> "
        "{message}"
    ) + end
    return fmessage


def color_support():
    """Check for color support in stderr as a notebook or terminal/tty."""
    # check if we're in IPython/jupyter
    tty1 = bool(IPython.get_ipython())
    # check if we're in a terminal
    tty2 = sys.stderr.isatty()
    return tty1 or tty2


def set_log_level(log_level: str = "DEBUG", log_file: Optional[Path] = None):
    """Add logger for jointaf to stderr and optionally to file.

    These loggers are bound to the 'extra' keyword 'jointaf'. Thus, any
    module that aims to use this formatted logger should put
    `logger = logger.bind(name="jointaf")` at the top of the module.

    The logger will use EITHER a STDERR or a LOGFILE, but not both.
    """
    # remove any previous loggers created by jointaf
    for idx in LOGGERS:
        try:
            logger.remove(idx)
        except ValueError:
            pass

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(exist_ok=True)
        log_file.touch(exist_ok=True)
        idx = logger.add(
            sink=log_file,
            level=log_level,
            colorize=False,
            format=formatter,
            filter=lambda x: x['extra'].get('name') == "jointaf",
            enqueue=True,
            rotation="50 MB",
        )
    else:
        idx = logger.add(
            sink=sys.stderr,
            level=log_level,
            colorize=color_support(),
            format=formatter,
            filter=lambda x: x['extra'].get("name") == "jointaf",
            enqueue=True,
        )
    LOGGERS.append(idx)

    # activate
    logger.enable("jointaf")
    logger.bind(name='jointaf').debug(f"jointaf logging enabled: {log_level}")


def get_logger():
    return logger.bind(name="jointaf")


@contextmanager
def capture_logs(log_level: str = "DEBUG") -> Iterator[List[str]]:
    """Collect jointaf log messages emitted inside the block.

    The sink is synchronous (no enqueue) so messages are available
    as soon as the logging call returns.

    >>> with capture_logs("DEBUG") as logs:
    ...     estimator.estimate(site)
    >>> any("P(f>0)" in i for i in logs)
    """
    messages: List[str] = []
    idx = logger.add(
        sink=lambda msg: messages.append(msg.record["message"]),
        level=log_level,
        filter=lambda x: x['extra'].get("name") == "jointaf",
    )
    try:
        yield messages
    finally:
        logger.remove(idx)


#
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from typing import Any, Optional, TypeVar, Union

from schemadoc.exceptions import SchemaDocTypeError, SchemaDocValueError
from schemadoc.translation import gettext as _

logger = logging.getLogger('schemadoc')

LOG_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARN': logging.WARNING,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}


def get_level(level: Union[str, int]) -> int:
    """Returns the numeric logging level of a level name or number."""
    if isinstance(level, str):
        try:
            return LOG_LEVELS[level.strip().upper()]
        except KeyError:
            raise SchemaDocValueError(
                _("{!r} is not a valid loglevel").format(level)
            ) from None
    elif not isinstance(level, int) or isinstance(level, bool):
        raise SchemaDocTypeError(
            _("a loglevel must be a name or an int, not {!r}").format(type(level))
        )
    elif level < 0:
        raise SchemaDocValueError(_("{!r} is not a valid loglevel").format(level))
    return level


def set_logging_level(level: Union[str, int]) -> None:
    """set logging level of schemadoc's logger."""
    logger.setLevel(get_level(level))


@contextmanager
def logging_level(level: Union[str, int]) -> Iterator[logging.Logger]:
    """
    A context manager that sets the level of schemadoc's logger, restoring
    the previous level at exit. The level is checked before any change.
    """
    current_level = logger.level
    logger.setLevel(get_level(level))
    try:
        yield logger
    finally:
        logger.setLevel(current_level)


RT = TypeVar('RT')


def logged(func: Callable[..., RT]) -> Callable[..., RT]:
    """
    A decorator for loaders and other functions that accept an optional
    'loglevel' keyword argument, used for the logger level during the call.
    """
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        loglevel: Optional[Union[int, str]] = kwargs.get('loglevel')
        if loglevel is None:
            return func(*args, **kwargs)

        with logging_level(loglevel):
            return func(*args, **kwargs)

    return wrapper

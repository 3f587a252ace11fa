#
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""
Translation of the messages of exceptions and validation issues. No message
catalogs are bundled with the package: a catalog is a compiled file
*<localedir>/<language>/LC_MESSAGES/schemadoc.mo*, looked up in the directory
provided to :func:`activate` or in the default locale directory of gettext.
"""
import gettext as _gettext
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import cast, Any, Optional, Union

__all__ = ['DOMAIN', 'activate', 'deactivate', 'gettext']

DOMAIN = 'schemadoc'

logger = logging.getLogger('schemadoc')

_translation: Any = None
_installed: bool = False


def activate(localedir: Union[None, str, Path] = None,
             languages: Optional[Iterable[str]] = None,
             fallback: bool = True,
             install: bool = False) -> bool:
    """
    Activates the translation of schemadoc messages. Returns `True` if a message
    catalog is found, otherwise, in fallback mode, messages are left untranslated
    and a warning is logged.

    :param localedir: the locale directory with the catalogs, for default is \
    the system-wide directory used by gettext.
    :param languages: a list of language codes, for default the languages \
    are taken from the environment variables used by gettext.
    :param fallback: if `False` raises an `OSError` when no catalog is found.
    :param install: if `True` installs the function _() in Python’s builtins namespace.
    """
    global _translation
    global _installed

    if languages is not None:
        languages = list(languages)

    found = _gettext.find(DOMAIN, localedir, languages) is not None
    translation = _gettext.translation(
        domain=DOMAIN,
        localedir=localedir,
        languages=languages,
        fallback=fallback,
    )
    if not found:
        logger.warning("No %r message catalog found for languages %r in %r",
                       DOMAIN, languages, localedir)

    deactivate()

    _translation = translation
    if install:
        _translation.install()
        _installed = True
    return found


def deactivate() -> None:
    """Deactivates the translation of schemadoc messages."""
    global _translation
    global _installed

    if _installed and _translation is not None:
        import builtins
        if builtins.__dict__.get('_') == _translation.gettext:  # pragma: no cover
            builtins.__dict__.pop('_')

    _translation = None
    _installed = False


def gettext(message: str) -> str:
    if _translation is None:
        return message
    return cast(str, _translation.gettext(message))

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
Checks and text conversion of leaf values, based on elementpath datatypes.
"""
import re
from decimal import Decimal
from functools import lru_cache
from typing import Any, Callable, Optional, Union

from elementpath import datatypes

from schemadoc.translation import gettext as _
from .model import LeafKind

LeafValueType = Union[str, int, float, Decimal]

SCALAR_TYPES = (str, int, float, Decimal)

DATE_TYPES_MAP: dict[str, Callable[[str], Any]] = {
    'date': datatypes.Date10.fromstring,
    'dateTime': datatypes.DateTime10.fromstring,
    'time': datatypes.Time.fromstring,
    'gYear': datatypes.GregorianYear10.fromstring,
    'gYearMonth': datatypes.GregorianYearMonth10.fromstring,
    'gMonth': datatypes.GregorianMonth.fromstring,
    'gMonthDay': datatypes.GregorianMonthDay.fromstring,
    'gDay': datatypes.GregorianDay.fromstring,
}

PICTURE_PATTERNS = {
    'Y': r'\d', 'M': r'\d', 'D': r'\d', 'h': r'\d', 'm': r'\d', 's': r'\d',
}


def leaf_text(value: Any) -> Optional[str]:
    """Returns the text representation of a leaf value."""
    if value is None:
        return None
    elif isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


@lru_cache(maxsize=None)
def picture_regex(picture: str) -> 're.Pattern[str]':
    """
    Translates a date picture string like 'YYYY-MM-DD' to a compiled regex.
    Placeholder letters match a digit, other characters match literally.
    """
    chunks = [PICTURE_PATTERNS.get(c, re.escape(c)) for c in picture]
    return re.compile(r'^%s$' % ''.join(chunks))


def check_numeric(value: Any) -> Optional[str]:
    """Returns an error message if the value is not a number, `None` otherwise."""
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        text = str(value)
    elif isinstance(value, str):
        text = value.strip()
    else:
        return _("value {!r} is not a number").format(value)

    try:
        datatypes.DecimalProxy(text)
    except (ValueError, ArithmeticError, TypeError):
        try:
            datatypes.DoubleProxy(text)
        except (ValueError, ArithmeticError, TypeError):
            return _("value {!r} is not a number").format(value)
    return None


def check_date_format(value: Any, fmt: str) -> Optional[str]:
    """
    Returns an error message if the value doesn't match the date format,
    `None` otherwise. Alternative formats are separated by '|', e.g. the
    format 'gYear|date' admits both '2020' and '2020-06-30'.
    """
    text = value.strip() if isinstance(value, str) else str(value)
    formats = fmt.split('|')
    for item in formats:
        try:
            parse_date = DATE_TYPES_MAP[item]
        except KeyError:
            if picture_regex(item).match(text) is not None:
                return None
        else:
            try:
                parse_date(text)
            except (ValueError, TypeError, OverflowError):
                pass
            else:
                return None

    if len(formats) > 1:
        return _("value {!r} doesn't match any of the date formats {!r}").format(value, fmt)
    elif fmt in DATE_TYPES_MAP:
        return _("value {!r} is not a valid xs:{}").format(value, fmt)
    return _("value {!r} doesn't match date format {!r}").format(value, fmt)


def check_leaf(value: Any, leaf: LeafKind) -> Optional[tuple[str, str]]:
    """
    Checks a leaf value against its kind.

    :returns: `None` if the value is valid, otherwise a couple with the issue kind \
    ('bad-leaf-type' or 'bad-leaf-format') and a message.
    """
    if value is None:
        if leaf.kind == 'text':
            return None
        return 'bad-leaf-type', _("missing {} value").format(leaf)
    elif not isinstance(value, SCALAR_TYPES) or isinstance(value, bool):
        msg = _("invalid type {!r} for a {} value").format(type(value).__name__, leaf)
        return 'bad-leaf-type', msg

    if leaf.kind == 'numeric':
        message = check_numeric(value)
        if message is not None:
            return 'bad-leaf-type', message
    elif leaf.kind == 'date-format':
        message = check_date_format(value, leaf.format or 'date')
        if message is not None:
            return 'bad-leaf-format', message
    elif leaf.kind == 'enum':
        text = leaf_text(value)
        if text not in leaf.values:
            msg = _("value {!r} is not one of {!r}").format(text, list(leaf.values))
            return 'bad-leaf-format', msg
    return None

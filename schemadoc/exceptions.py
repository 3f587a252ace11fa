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
This module contains the exception classes for the package.
"""
from typing import TYPE_CHECKING, Any, Optional

from schemadoc.translation import gettext as _

if TYPE_CHECKING:
    from schemadoc.document import DocumentNode  # noqa: F401
    from schemadoc.validation import ValidationIssue  # noqa: F401


class SchemaDocException(Exception):
    """The base exception that let you catch all the errors generated by the library."""
    message: str

    def __init__(self, message: Any = '') -> None:
        super().__init__(message)
        self.message = str(message)

    def __str__(self) -> str:
        return self.message


class SchemaDocValueError(SchemaDocException, ValueError):
    pass


class SchemaDocTypeError(SchemaDocException, TypeError):
    pass


class SchemaDocKeyError(SchemaDocException, KeyError):
    pass


class SchemaDocOSError(SchemaDocException, OSError):
    pass


class XMLResourceForbidden(SchemaDocValueError):
    """Raised when a parsed XML source contains forbidden entities or references."""


class SchemaModelError(SchemaDocValueError):
    """Raised when a schema definition is inconsistent or cannot be loaded."""

    def __init__(self, message: str, source: Optional[Any] = None) -> None:
        super().__init__(message)
        self.source = source

    def __str__(self) -> str:
        if self.source is None:
            return self.message
        return f"{self.message}\n\nSource: {self.source!r}"


class UnknownTypeError(SchemaDocException, LookupError):
    """Raised when a name is looked up in a schema model that doesn't register it."""

    def __init__(self, name: str, schema_name: Optional[str] = None) -> None:
        if schema_name is None:
            msg = _("unknown element type {!r}").format(name)
        else:
            msg = _("unknown element type {!r} for schema {!r}").format(name, schema_name)
        super().__init__(msg)
        self.name = name
        self.schema_name = schema_name


class UnknownChildOrAttributeError(SchemaDocException, LookupError):
    """
    Raised by a builder helper called with an argument that is neither an
    allowed child nor an attribute of the element type.
    """
    def __init__(self, name: str, containing_type: str) -> None:
        msg = _("{!r} is not an allowed child or attribute of {!r}")
        super().__init__(msg.format(name, containing_type))
        self.name = name
        self.containing_type = containing_type


class MalformedNodeError(SchemaDocValueError):
    """Raised when a node can't be rendered because its state is inconsistent."""

    def __init__(self, node: 'DocumentNode', reason: str) -> None:
        self.node = node
        self.path = node.path
        msg = _("malformed node at {!r}: {}").format('/'.join(self.path), reason)
        super().__init__(msg)


class DocumentValidationError(SchemaDocValueError):
    """Raised to report all the issues of an invalid document at once."""

    def __init__(self, issues: list['ValidationIssue']) -> None:
        if not issues:
            raise SchemaDocValueError(_("passed an empty issue list!"))
        self.issues = issues
        chunks = [_("document has {} validation issue(s):").format(len(issues))]
        chunks.extend(f'  - {issue}' for issue in issues)
        super().__init__('\n'.join(chunks))


__all__ = ['SchemaDocException', 'SchemaDocValueError', 'SchemaDocTypeError',
           'SchemaDocKeyError', 'SchemaDocOSError', 'XMLResourceForbidden',
           'SchemaModelError', 'UnknownTypeError', 'UnknownChildOrAttributeError',
           'MalformedNodeError', 'DocumentValidationError']

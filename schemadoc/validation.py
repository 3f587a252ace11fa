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
This module contains the validator of document trees and the classes of
the validation issues.

Issues are collected, never raised: a validation run reports all the
problems of a tree in a deterministic order. For each node the issues are
reported in this order:

  1. unexpected attributes
  2. leaf value issues (bad-leaf-type or bad-leaf-format)
  3. unexpected children, in document order
  4. cardinality violations and missing required children, in schema order
  5. the issues of the children, in document order

So an element that is both unexpected and malformed is reported as
unexpected first.
"""
from collections import Counter
from collections.abc import Iterator
from typing import ClassVar, Optional

from schemadoc.exceptions import DocumentValidationError
from schemadoc.translation import gettext as _
from schemadoc.schema import SchemaModel, SchemaElementType, check_leaf
from schemadoc.document import DocumentNode


class ValidationIssue:
    """
    A mismatch between a document tree and its schema.

    :param node: the offending node.
    :param message: a human-readable description of the issue.
    :param path: the sequence of type names from the root to the offending \
    node, for default is the path of the node.
    :param child: the child element type concerned by the issue, if any.
    """
    kind: ClassVar[str] = ''

    def __init__(self, node: DocumentNode,
                 message: str,
                 path: Optional[tuple[str, ...]] = None,
                 child: Optional[str] = None) -> None:
        self.node = node
        self.message = message
        self.path = path if path is not None else node.path
        self.child = child

    def __repr__(self) -> str:
        return '%s(path=%r, message=%r)' % (
            self.__class__.__name__, self.path_string, self.message
        )

    def __str__(self) -> str:
        return f'{self.kind} at /{self.path_string}: {self.message}'

    @property
    def path_string(self) -> str:
        return '/'.join(self.path)


class MissingRequiredChild(ValidationIssue):
    kind = 'missing-required-child'


class UnexpectedElement(ValidationIssue):
    kind = 'unexpected-element'


class CardinalityViolation(ValidationIssue):
    kind = 'cardinality-violation'


class BadLeafType(ValidationIssue):
    kind = 'bad-leaf-type'


class BadLeafFormat(ValidationIssue):
    kind = 'bad-leaf-format'


class UnexpectedAttribute(ValidationIssue):
    kind = 'unexpected-attribute'


ISSUE_CLASSES: dict[str, type[ValidationIssue]] = {
    cls.kind: cls for cls in (MissingRequiredChild, UnexpectedElement, CardinalityViolation,
                              BadLeafType, BadLeafFormat, UnexpectedAttribute)
}


def iter_issues(root: DocumentNode, schema: SchemaModel) -> Iterator[ValidationIssue]:
    """
    Generates the validation issues of a document tree, in document order.
    The tree is not modified.

    :param root: the root node of the tree.
    :param schema: the schema model.
    """
    if root.tag != schema.root:
        msg = _("the root element must be {!r}, not {!r}").format(schema.root, root.tag)
        yield UnexpectedElement(root, msg, path=(root.tag,), child=root.tag)

    if schema.is_registered(root.tag):
        yield from _iter_node_issues(root, schema[root.tag], schema, (root.tag,))


def _iter_node_issues(node: DocumentNode,
                      xsd_type: SchemaElementType,
                      schema: SchemaModel,
                      path: tuple[str, ...]) -> Iterator[ValidationIssue]:

    for name in node.attrib:
        if name not in xsd_type.attributes:
            msg = _("attribute {!r} is not allowed for {!r}").format(name, node.tag)
            yield UnexpectedAttribute(node, msg, path)

    if xsd_type.leaf is not None:
        result = check_leaf(node.value, xsd_type.leaf)
        if result is not None:
            kind, msg = result
            yield ISSUE_CLASSES[kind](node, msg, path)
    elif node.value is not None:
        msg = _("element {!r} doesn't admit a leaf value").format(node.tag)
        yield BadLeafType(node, msg, path)

    counter: Counter[str] = Counter()
    for child in node:
        counter[child.tag] += 1
        if not xsd_type.is_allowed_child(child.tag):
            msg = _("{!r} is not an allowed child of {!r}").format(child.tag, node.tag)
            yield UnexpectedElement(child, msg, path + (child.tag,), child=child.tag)

    for child_name, cardinality in xsd_type.children:
        occurs = counter[child_name]
        if occurs < cardinality.min_occurs:
            msg = _("missing required child {!r}").format(child_name)
            yield MissingRequiredChild(node, msg, path, child=child_name)
        elif cardinality.max_occurs is not None and occurs > cardinality.max_occurs:
            msg = _("child {!r} occurs {} times, {} is the maximum ({})").format(
                child_name, occurs, cardinality.max_occurs, cardinality.value
            )
            yield CardinalityViolation(node, msg, path, child=child_name)

    for child in node:
        try:
            child_type = schema[child.tag]
        except KeyError:
            continue  # no rules for unknown element types
        yield from _iter_node_issues(child, child_type, schema, path + (child.tag,))


def validate(root: DocumentNode, schema: SchemaModel) -> list[ValidationIssue]:
    """
    Validates a document tree against a schema model.

    :param root: the root node of the tree.
    :param schema: the schema model.
    :return: the list of all the issues found, empty if the tree is valid.
    """
    return list(iter_issues(root, schema))


def is_valid(root: DocumentNode, schema: SchemaModel) -> bool:
    """Returns `True` if the document tree has no validation issues."""
    return next(iter_issues(root, schema), None) is None


def assert_valid(root: DocumentNode, schema: SchemaModel) -> None:
    """
    Like :func:`validate` but raises a :exc:`DocumentValidationError`
    carrying all the issues if the tree is invalid.
    """
    issues = validate(root, schema)
    if issues:
        raise DocumentValidationError(issues)

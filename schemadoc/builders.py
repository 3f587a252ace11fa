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
This module contains the builder helpers, checked constructors of document
nodes driven by a schema model, and the generic unchecked constructor.
"""
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Optional

from schemadoc.exceptions import SchemaDocTypeError, SchemaDocValueError, \
    UnknownChildOrAttributeError
from schemadoc.translation import gettext as _
from schemadoc.schema import SchemaModel, SchemaElementType
from schemadoc.document import DocumentNode

TEXT_KEY = '$'
ATTR_PREFIX = '@'


def element(tag: str,
            value: Optional[Any] = None,
            attrib: Optional[Mapping[str, Any]] = None,
            children: Iterable[DocumentNode] = ()) -> DocumentNode:
    """
    Generic unchecked constructor: admits any tag, attribute and child. The
    nodes built this way are checked only by the validator.
    """
    return DocumentNode(tag, value, attrib, children)


def iter_nodes(data: Any) -> Iterator[DocumentNode]:
    """Iterates the nodes included in builder arguments, also nested ones."""
    if isinstance(data, DocumentNode):
        yield data
    elif isinstance(data, Mapping):
        for value in data.values():
            yield from iter_nodes(value)
    elif isinstance(data, (list, tuple)):
        for value in data:
            yield from iter_nodes(value)


def dismantle(node: DocumentNode, provided: list[DocumentNode]) -> None:
    """Detaches the children of a built node, dismantling the built ones."""
    children = list(node)
    del node[:]
    for child in children:
        if not any(child is x for x in provided):
            dismantle(child, provided)


class BuilderHelper:
    """
    A checked constructor of document nodes of an element type. Keyword
    arguments must match the allowed children or the attributes of the type,
    children are placed in the order declared by the schema.

    :param builders: the builders collection that owns the helper.
    :param xsd_type: the element type of the built nodes.
    """
    def __init__(self, builders: 'Builders', xsd_type: SchemaElementType) -> None:
        self.builders = builders
        self.xsd_type = xsd_type

    def __repr__(self) -> str:
        return '%s(name=%r)' % (self.__class__.__name__, self.xsd_type.name)

    @property
    def name(self) -> str:
        return self.xsd_type.name

    def __call__(self, *args: Any, **kwargs: Any) -> DocumentNode:
        """
        Builds a new node. The only positional argument admitted is the leaf
        value, for element types that have a leaf kind.

        :raises: :exc:`UnknownChildOrAttributeError` if a keyword argument is not \
        a child or an attribute of the element type. :exc:`SchemaDocTypeError` if \
        an argument can't be used for building the node.
        """
        xsd_type = self.xsd_type
        for name in kwargs:
            if not xsd_type.is_allowed_child(name) and name not in xsd_type.attributes:
                raise UnknownChildOrAttributeError(name, xsd_type.name)

        if len(args) > 1:
            raise SchemaDocTypeError(
                _("{!r} builder takes at most 1 positional argument").format(self.name)
            )
        value = args[0] if args else None
        if value is not None and xsd_type.leaf is None:
            raise SchemaDocTypeError(
                _("element type {!r} doesn't admit a leaf value").format(self.name)
            )

        children: list[DocumentNode] = []
        try:
            for child_name, cardinality in xsd_type.children:
                arg = kwargs.get(child_name)
                if arg is None:
                    continue
                elif isinstance(arg, (list, tuple)):
                    if not cardinality.is_repeatable:
                        msg = _("child {!r} of {!r} is not repeatable")
                        raise SchemaDocTypeError(msg.format(child_name, self.name))
                    children.extend(
                        self.build_child(child_name, x) for x in arg if x is not None
                    )
                else:
                    children.append(self.build_child(child_name, arg))

            for k, child in enumerate(children):
                if any(child is x for x in children[k + 1:]):
                    msg = _("{!r} is provided more than once")
                    raise SchemaDocValueError(msg.format(child))

            attrib = {name: kwargs[name] for name in xsd_type.attributes
                      if kwargs.get(name) is not None and not xsd_type.is_allowed_child(name)}
            return DocumentNode(self.name, value, attrib, children)
        except Exception:
            # nodes provided by the caller must be left without a parent
            provided = list(iter_nodes(kwargs))
            for child in children:
                if not any(child is x for x in provided):
                    dismantle(child, provided)
            raise

    def build_child(self, child_name: str, arg: Any) -> DocumentNode:
        if isinstance(arg, DocumentNode):
            if arg.tag != child_name:
                msg = _("a {!r} node is provided for child {!r} of {!r}")
                raise SchemaDocValueError(msg.format(arg.tag, child_name, self.name))
            elif arg.parent is not None:
                raise SchemaDocValueError(
                    _("{!r} is already a child of {!r}").format(arg, arg.parent)
                )
            return arg

        if not isinstance(arg, Mapping) and self.builders[child_name].xsd_type.leaf is None:
            msg = _("child {!r} of {!r} requires a node or a mapping, not {!r}")
            raise SchemaDocTypeError(msg.format(child_name, self.name, type(arg).__name__))
        return self.builders.build(child_name, arg)


class Builders(Mapping[str, BuilderHelper]):
    """
    The collection of builder helpers of a schema model, one for each element
    type. Helpers are accessed as attributes or as items:

        >>> b = Builders(schema)
        >>> b.individualName(givenName='Jeanette', surName='Clark')
        DocumentNode(tag='individualName')

    :param schema: the schema model.
    """
    def __init__(self, schema: SchemaModel) -> None:
        self.schema = schema
        self._helpers: dict[str, BuilderHelper] = {}

    def __repr__(self) -> str:
        return '%s(schema=%r)' % (self.__class__.__name__, self.schema)

    def __getitem__(self, name: str) -> BuilderHelper:
        try:
            return self._helpers[name]
        except KeyError:
            helper = self._helpers[name] = BuilderHelper(self, self.schema.resolve(name))
            return helper

    def __getattr__(self, name: str) -> BuilderHelper:
        if name.startswith('_'):
            raise AttributeError(name)
        return self[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.schema)

    def __len__(self) -> int:
        return len(self.schema)

    def __contains__(self, name: object) -> bool:
        return name in self.schema

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self.schema))

    @staticmethod
    def element(tag: str,
                value: Optional[Any] = None,
                attrib: Optional[Mapping[str, Any]] = None,
                children: Iterable[DocumentNode] = ()) -> DocumentNode:
        """Generic unchecked constructor, see :func:`element`."""
        return element(tag, value, attrib, children)

    def build(self, tag: str, data: Any) -> DocumentNode:
        """
        Builds a node from a leaf value or from a nested mapping, where the
        key '$' holds the leaf value and keys prefixed by '@' are attributes.
        """
        helper = self[tag]
        if isinstance(data, Mapping):
            kwargs = {k[1:] if k.startswith(ATTR_PREFIX) else k: v
                      for k, v in data.items() if k != TEXT_KEY}
            if TEXT_KEY in data:
                return helper(data[TEXT_KEY], **kwargs)
            return helper(**kwargs)
        return helper(data)

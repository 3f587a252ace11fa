#
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
from collections.abc import Iterable, Iterator, Mapping, MutableSequence
from typing import Any, Optional, Union, overload
from xml.etree.ElementTree import Element, SubElement

from elementpath import select

from schemadoc.exceptions import SchemaDocTypeError, SchemaDocValueError
from schemadoc.translation import gettext as _
from schemadoc.schema.leaves import leaf_text


class DocumentNode(MutableSequence['DocumentNode']):
    """
    A node of a document tree, an Element like object with a type name, an
    optional leaf value, string attributes and an ordered list of children.
    A node exclusively owns its children: a node can't be appended to another
    parent before being removed from its current one.

    :param tag: the name of the element type, bound to a schema model entry.
    :param value: the optional leaf value of the node.
    :param attrib: the attributes of the node.
    :param children: the initial children of the node.
    """
    _children: list['DocumentNode']
    tag: str
    value: Optional[Any]
    attrib: dict[str, str]
    parent: Optional['DocumentNode']

    def __init__(self, tag: str,
                 value: Optional[Any] = None,
                 attrib: Optional[Mapping[str, Any]] = None,
                 children: Iterable['DocumentNode'] = ()) -> None:
        if not isinstance(tag, str) or not tag:
            raise SchemaDocTypeError(_("a node tag must be a not empty string"))

        super().__init__()
        self._children = []
        self.tag = tag
        self.value = value
        self.attrib = {}
        self.parent = None

        if attrib is not None:
            for k, v in attrib.items():
                self.set(k, v)

        try:
            self.extend(children)
        except Exception:
            del self[:]
            raise

    def _check_child(self, child: Any, replaced: Iterable['DocumentNode'] = ()) \
            -> 'DocumentNode':
        """Checks a new child, that can be one of the replaced children."""
        if not isinstance(child, DocumentNode):
            raise SchemaDocTypeError(
                _("a child must be a DocumentNode, not {!r}").format(type(child))
            )
        elif child.parent is self:
            if not any(child is x for x in replaced):
                msg = _("{!r} is already a child of {!r}")
                raise SchemaDocValueError(msg.format(child, self))
        elif child.parent is not None:
            raise SchemaDocValueError(
                _("{!r} is already a child of {!r}").format(child, child.parent)
            )
        elif child is self or any(child is x for x in self.iterancestors()):
            raise SchemaDocValueError(_("a node can't be a descendant of itself"))
        return child

    def _release(self, child: 'DocumentNode') -> None:
        if not any(child is x for x in self._children):
            child.parent = None

    @overload
    def __getitem__(self, i: int) -> 'DocumentNode': ...  # pragma: no cover

    @overload
    def __getitem__(self, s: slice) -> MutableSequence['DocumentNode']: ...  # pragma: no cover

    def __getitem__(self, i: Union[int, slice]) \
            -> Union['DocumentNode', MutableSequence['DocumentNode']]:
        return self._children[i]

    def __setitem__(self, i: Union[int, slice], child: Any) -> None:
        # all the new children are checked before changing any parent
        if isinstance(i, slice):
            old_children = self._children[i]
            new_children: list[DocumentNode] = []
            for x in child:
                self._check_child(x, old_children)
                if any(x is y for y in new_children):
                    msg = _("{!r} is repeated in the assigned children")
                    raise SchemaDocValueError(msg.format(x))
                new_children.append(x)

            self._children[i] = new_children
            for new_child in new_children:
                new_child.parent = self
            for old_child in old_children:
                self._release(old_child)
        else:
            old_child = self._children[i]
            self._children[i] = self._check_child(child, (old_child,))
            child.parent = self
            self._release(old_child)

    def __delitem__(self, i: Union[int, slice]) -> None:
        old_children = self._children[i] if isinstance(i, slice) else [self._children[i]]
        del self._children[i]
        for old_child in old_children:
            self._release(old_child)

    def __len__(self) -> int:
        return len(self._children)

    def insert(self, i: int, child: 'DocumentNode') -> None:
        self._children.insert(i, self._check_child(child))
        child.parent = self

    def __repr__(self) -> str:
        return '%s(tag=%r)' % (self.__class__.__name__, self.tag)

    def __iter__(self) -> Iterator['DocumentNode']:
        yield from self._children

    @property
    def text(self) -> Optional[str]:
        """The string value of the node."""
        return leaf_text(self.value)

    @property
    def has_value(self) -> bool:
        return self.value is not None

    def get(self, key: str, default: Any = None) -> Any:
        """Gets a node attribute."""
        return self.attrib.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Sets a node attribute, the value is stored as a string."""
        if not isinstance(key, str) or not key:
            raise SchemaDocTypeError(_("an attribute name must be a not empty string"))
        self.attrib[key] = leaf_text(value) if value is not None else ''

    @property
    def root(self) -> 'DocumentNode':
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def path(self) -> tuple[str, ...]:
        """The sequence of type names from the root to the node."""
        tags = [self.tag]
        tags.extend(x.tag for x in self.iterancestors())
        return tuple(reversed(tags))

    def iterancestors(self) -> Iterator['DocumentNode']:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def iter(self, tag: Optional[str] = None) -> Iterator['DocumentNode']:
        """
        Creates an iterator for the node and its descendants in document order.
        If tag is not `None` or '*', only nodes whose tag matches are returned.
        """
        if tag == '*':
            tag = None
        if tag is None or tag == self.tag:
            yield self
        for child in self._children:
            yield from child.iter(tag)

    def iterchildren(self, tag: Optional[str] = None) -> Iterator['DocumentNode']:
        """
        Creates an iterator for the child nodes. If *tag* is not `None` or '*',
        only nodes whose tag matches are returned.
        """
        if tag == '*':
            tag = None
        for child in self:
            if tag is None or tag == child.tag:
                yield child

    def copy(self) -> 'DocumentNode':
        """Returns a detached deep copy of the node."""
        return DocumentNode(
            self.tag, self.value, self.attrib, [child.copy() for child in self]
        )

    def __copy__(self) -> 'DocumentNode':
        return self.copy()

    def __deepcopy__(self, memo: Any) -> 'DocumentNode':
        return self.copy()

    def detach(self) -> 'DocumentNode':
        """Removes the node from its parent, if any, and returns it."""
        if self.parent is not None:
            parent = self.parent
            for k, child in enumerate(parent):
                if child is self:
                    del parent[k]
                    break
        return self

    def deep_equal(self, other: Any) -> bool:
        """Returns `True` if the other node has the same tag, value, attributes and children."""
        if not isinstance(other, DocumentNode):
            return False
        return self.tag == other.tag and self.text == other.text \
            and self.attrib == other.attrib and len(self) == len(other) \
            and all(c1.deep_equal(c2) for c1, c2 in zip(self, other))

    def _build_etree(self) -> tuple[Element, dict[Element, 'DocumentNode']]:
        elements: dict[Element, DocumentNode] = {}

        def build(node: DocumentNode, parent: Optional[Element]) -> Element:
            if parent is None:
                elem = Element(node.tag, node.attrib)
            else:
                elem = SubElement(parent, node.tag, node.attrib)
            elem.text = node.text
            elements[elem] = node
            for child in node:
                build(child, elem)
            return elem

        return build(self, None), elements

    def xpath(self, path: str, namespaces: Optional[Mapping[str, str]] = None) -> list[Any]:
        """
        Applies an XPath expression on the node, that is considered the root.
        Element results are mapped back to document nodes, other results are
        returned as they are.
        """
        root, elements = self._build_etree()
        results = select(root, path, namespaces)
        if not isinstance(results, list):
            return [results]
        return [elements.get(x, x) for x in results]

    def find(self, path: str,
             namespaces: Optional[Mapping[str, str]] = None) -> Optional['DocumentNode']:
        """
        Finds the first node matching the path.

        :param path: an XPath expression that considers the node as the root.
        :param namespaces: an optional mapping from namespace prefix to namespace URI.
        :return: the first matching node or ``None`` if there is no match.
        """
        return next((x for x in self.xpath(path, namespaces)
                     if isinstance(x, DocumentNode)), None)

    def findall(self, path: str,
                namespaces: Optional[Mapping[str, str]] = None) -> list['DocumentNode']:
        """
        Finds all nodes matching the path, in document order.
        """
        return [x for x in self.xpath(path, namespaces) if isinstance(x, DocumentNode)]

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
This module contains the serializer of document trees to XML.
"""
import logging
from pathlib import Path
from typing import IO, Union
from xml.etree.ElementTree import Element, SubElement, tostring, indent as etree_indent

from schemadoc.exceptions import MalformedNodeError, SchemaDocOSError, SchemaDocTypeError
from schemadoc.translation import gettext as _
from schemadoc.names import XML_DECLARATION, XSI_NAMESPACE
from schemadoc.schema import SchemaModel
from schemadoc.document import DocumentNode

logger = logging.getLogger('schemadoc')

IndentType = Union[None, int, str]


def ordered_children(node: DocumentNode, schema: SchemaModel) -> list[DocumentNode]:
    """
    Returns the children of a node sorted by the order declared by the schema.
    Children not declared by the schema follow the declared ones, keeping
    their insertion order.
    """
    try:
        xsd_type = schema[node.tag]
    except KeyError:
        return list(node)

    unknown_position = len(xsd_type.children)

    def sort_key(child: DocumentNode) -> int:
        position = xsd_type.child_position(child.tag)
        return unknown_position if position is None else position

    return sorted(node, key=sort_key)  # sorted() is stable


def to_etree(root: DocumentNode, schema: SchemaModel) -> Element:
    """
    Converts a document tree to an ElementTree element. The root element
    carries the namespace declarations of the schema.

    :raises: :exc:`MalformedNodeError` if a node has both a leaf value and children.
    """
    attrib: dict[str, str] = {}
    if schema.namespace:
        if schema.prefix:
            attrib[f'xmlns:{schema.prefix}'] = schema.namespace
        else:
            attrib['xmlns'] = schema.namespace
    if schema.schema_location:
        attrib['xmlns:xsi'] = XSI_NAMESPACE
        attrib['xsi:schemaLocation'] = schema.schema_location

    tag = f'{schema.prefix}:{root.tag}' if schema.prefix else root.tag
    attrib.update(root.attrib)
    elem = Element(tag, attrib)
    _fill_element(elem, root, schema)
    return elem


def _fill_element(elem: Element, node: DocumentNode, schema: SchemaModel) -> None:
    if node.value is not None and len(node):
        raise MalformedNodeError(node, _("the node has both a leaf value and children"))

    elem.text = node.text
    for child in ordered_children(node, schema):
        _fill_element(SubElement(elem, child.tag, child.attrib), child, schema)


def serialize(root: DocumentNode,
              schema: SchemaModel,
              indent: IndentType = None,
              xml_declaration: bool = True) -> str:
    """
    Serializes a document tree to an XML string. Structurally invalid trees
    are serialized as they are, children are rendered in the schema order.

    :param root: the root node of the tree.
    :param schema: the schema model.
    :param indent: if provided pretty-prints the XML, using the number \
    of spaces or the string for each indentation level. For default the \
    most compact representation is produced.
    :param xml_declaration: if `True` (default) the XML declaration line is \
    inserted at the head.
    :raises: :exc:`MalformedNodeError` if a node has both a leaf value and children.
    """
    elem = to_etree(root, schema)
    if indent is not None:
        if isinstance(indent, int):
            indent = ' ' * indent
        elif not isinstance(indent, str):
            raise SchemaDocTypeError(_("invalid type {!r} for indent").format(type(indent)))
        etree_indent(elem, space=indent)

    text = tostring(elem, encoding='unicode')
    if xml_declaration:
        return f'{XML_DECLARATION}\n{text}'
    return text


def write(root: DocumentNode,
          schema: SchemaModel,
          target: Union[str, Path, IO[str]],
          indent: IndentType = 2,
          xml_declaration: bool = True) -> None:
    """
    Serializes a document tree and writes it to a path or to a text file-like
    object, encoded in UTF-8. The tree is serialized before opening the target,
    so a failed serialization leaves no partial output.
    """
    text = serialize(root, schema, indent, xml_declaration) + '\n'
    if hasattr(target, 'write'):
        target.write(text)  # type: ignore[union-attr]
        return

    try:
        with open(target, 'w', encoding='utf-8') as fp:  # type: ignore[arg-type]
            fp.write(text)
    except OSError as err:
        raise SchemaDocOSError(err) from None
    logger.info("Write %r document to %s", root.tag, target)

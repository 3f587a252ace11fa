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
This module contains the parser of XML documents into document trees.
"""
import logging
from typing import Optional
from xml.etree.ElementTree import Element

from schemadoc.names import XSI_NAMESPACE
from schemadoc.utils.qnames import get_namespace, local_name
from schemadoc.resources import SourceType, load_xml
from schemadoc.schema import SchemaModel
from schemadoc.document import DocumentNode

logger = logging.getLogger('schemadoc')


def parse(source: SourceType, schema: Optional[SchemaModel] = None) -> DocumentNode:
    """
    Parses an XML source into a document tree. Namespace qualifiers are
    removed from tags and leaf values are restored as strings.

    :param source: an XML string, bytes, a path or a file-like object.
    :param schema: an optional schema model, used for checking the namespace \
    of the root element.
    :raises: :exc:`XMLResourceForbidden` if the source declares entities, \
    :exc:`SchemaDocValueError` if the source is not well-formed XML.
    """
    root = load_xml(source)
    if schema is not None and schema.namespace:
        namespace = get_namespace(root.tag)
        if namespace != schema.namespace:
            logger.warning("Root namespace %r doesn't match the namespace %r of schema %r",
                           namespace, schema.namespace, schema.name)

    attrib = {local_name(k): v for k, v in root.attrib.items()
              if get_namespace(k) != XSI_NAMESPACE}
    node = DocumentNode(local_name(root.tag), attrib=attrib)
    _fill_node(node, root)
    logger.debug("Parsed %r document with %d nodes", node.tag, sum(1 for _ in node.iter()))
    return node


def _fill_node(node: DocumentNode, elem: Element) -> None:
    if len(elem):
        if elem.text is not None and elem.text.strip():
            node.value = elem.text  # mixed content, left to the validator
        for child in elem:
            child_node = DocumentNode(local_name(child.tag), attrib=child.attrib)
            node.append(child_node)
            _fill_node(child_node, child)
    else:
        node.value = elem.text

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
This module contains the loaders that build a schema model from a mapping,
from a JSON document or from a subset of XML Schema 1.0.
"""
import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any, Optional, Union
from xml.etree.ElementTree import Element

from schemadoc.exceptions import SchemaModelError, SchemaDocValueError
from schemadoc.translation import gettext as _
from schemadoc.resources import SourceType, is_inline_source, read_data, \
    read_text, load_xml
from schemadoc.utils.logger import logged
from schemadoc.utils.qnames import local_name
import schemadoc.names as nm

from .model import Cardinality, LeafKind, SchemaElementType, SchemaModel

logger = logging.getLogger('schemadoc')

SchemaSourceType = Union[SchemaModel, Mapping[str, Any], SourceType]


def from_mapping(data: Mapping[str, Any]) -> SchemaModel:
    """
    Builds a schema model from a mapping, usually decoded from a JSON document.

    :param data: a mapping with the optional keys 'name', 'version', 'namespace', \
    'prefix', 'schema_location', and the required keys 'root' and 'types'. The \
    value of 'types' is a mapping from type names to definitions with the optional \
    keys 'children' (a list of couples child name and cardinality), 'leaf' \
    (a leaf kind name or a mapping), 'attributes' (a list of names) and 'recursive'.
    """
    if not isinstance(data, Mapping):
        raise SchemaModelError(_("a schema definition must be a mapping"), data)

    try:
        root = data['root']
        definitions = data['types']
    except KeyError as err:
        raise SchemaModelError(_("missing key {} in schema definition").format(err)) from None

    if not isinstance(definitions, Mapping):
        raise SchemaModelError(_("'types' must be a mapping"), definitions)

    types = []
    for name, definition in definitions.items():
        if definition is None:
            definition = {}
        elif not isinstance(definition, Mapping):
            raise SchemaModelError(_("invalid definition for {!r}").format(name), definition)

        children = []
        for item in definition.get('children', ()):
            if isinstance(item, str):
                children.append((item, 'required'))
            else:
                try:
                    child_name, cardinality = item
                except (TypeError, ValueError):
                    msg = _("invalid child declaration {!r} in {!r}").format(item, name)
                    raise SchemaModelError(msg) from None
                children.append((child_name, cardinality))

        leaf = definition.get('leaf')
        types.append(SchemaElementType(
            name=name,
            children=children,
            leaf=LeafKind.parse(leaf) if leaf is not None else None,
            attributes=definition.get('attributes', ()),
            recursive=bool(definition.get('recursive', False)),
        ))
        logger.debug("Register element type %r", name)

    schema = SchemaModel(
        types=types,
        root=root,
        name=data.get('name', ''),
        version=data.get('version', ''),
        namespace=data.get('namespace', ''),
        prefix=data.get('prefix', ''),
        schema_location=data.get('schema_location'),
    )
    logger.info("Loaded schema %r with %d element types", schema.name, len(schema))
    return schema


@logged
def from_json(source: SourceType, loglevel: Optional[Union[str, int]] = None) -> SchemaModel:
    """
    Builds a schema model from a JSON document.

    :param source: a JSON string, a path or a file-like object.
    :param loglevel: for setting a different logging level for the loading.
    """
    try:
        data = json.loads(read_text(source))
    except json.JSONDecodeError as err:
        raise SchemaModelError(_("invalid JSON schema definition: {}").format(err)) from None
    return from_mapping(data)


class XsdSubsetLoader:
    """
    A loader for a subset of XML Schema 1.0. Element types are named after the
    element declarations, so the first declaration of a name wins and later
    conflicting declarations are ignored with a warning.

    :param schema_elem: the root element of an XSD document.
    """
    def __init__(self, schema_elem: Element) -> None:
        if schema_elem.tag != nm.XSD_SCHEMA:
            raise SchemaModelError(_("the source is not an XSD schema"), schema_elem.tag)

        self.schema_elem = schema_elem
        self.namespace = schema_elem.get('targetNamespace', '')
        self.version = schema_elem.get('version', '')
        self.elements: dict[str, Element] = {}
        self.complex_types: dict[str, Element] = {}
        self.simple_types: dict[str, Element] = {}
        self.attributes: dict[str, Element] = {}
        self.groups: dict[str, Element] = {}
        self.attribute_groups: dict[str, Element] = {}
        self.definitions: dict[str, dict[str, Any]] = {}
        self._expanding: list[str] = []

        globals_map = {
            nm.XSD_ELEMENT: self.elements,
            nm.XSD_COMPLEX_TYPE: self.complex_types,
            nm.XSD_SIMPLE_TYPE: self.simple_types,
            nm.XSD_ATTRIBUTE: self.attributes,
            nm.XSD_GROUP: self.groups,
            nm.XSD_ATTRIBUTE_GROUP: self.attribute_groups,
        }
        for child in schema_elem:
            if child.tag in (nm.XSD_ANNOTATION, nm.XSD_NOTATION):
                continue
            elif child.tag not in globals_map:
                self.unsupported(child)

            name = child.get('name')
            if name is not None:
                globals_map[child.tag][name] = child

        if not self.elements:
            raise SchemaModelError(_("the XSD schema has no global element declarations"))

    def load(self, root: Optional[str] = None, **kwargs: Any) -> SchemaModel:
        if root is None:
            root = next(iter(self.elements))
        elif root not in self.elements:
            raise SchemaModelError(_("{!r} is not a global element of the schema").format(root))

        for elem in self.elements.values():
            self.load_element(elem)

        self.mark_recursive_types()

        types = [
            SchemaElementType(
                name=name,
                children=[(k, Cardinality.from_occurs(*occurs))
                          for k, occurs in definition['children'].items()],
                leaf=definition['leaf'],
                attributes=definition['attributes'],
                recursive=definition['recursive'],
            ) for name, definition in self.definitions.items()
        ]
        kwargs.setdefault('namespace', self.namespace)
        kwargs.setdefault('version', self.version)
        return SchemaModel(types, root=root, **kwargs)

    def get_type_name(self, qname: str) -> tuple[str, bool]:
        """Returns the local name of a type reference and if it's an XSD builtin."""
        name = local_name(qname)
        if name in self.complex_types or name in self.simple_types:
            return name, False
        return name, name in nm.XSD_TEXT_TYPES or name in nm.XSD_NUMERIC_TYPES \
            or name in nm.XSD_DATE_TYPES

    def load_element(self, elem: Element) -> str:
        """Loads an element declaration and returns the name of its element type."""
        ref = elem.get('ref')
        if ref is not None:
            try:
                elem = self.elements[local_name(ref)]
            except KeyError:
                raise SchemaModelError(_("unresolved element reference {!r}").format(ref))

        name = elem.get('name')
        if not name:
            raise SchemaModelError(_("an element declaration requires a name"))

        signature = elem.get('type') or id(elem)
        if name in self.definitions:
            if self.definitions[name]['signature'] != signature:
                logger.warning("Conflicting declaration of element %r is ignored", name)
            return name

        definition: dict[str, Any] = {
            'signature': signature,
            'children': {},
            'leaf': None,
            'attributes': [],
            'recursive': False,
        }
        self.definitions[name] = definition  # inserted before children for recursion
        logger.debug("Register element type %r", name)

        type_ref = elem.get('type')
        if type_ref is not None:
            type_name, is_builtin = self.get_type_name(type_ref)
            if is_builtin:
                definition['leaf'] = self.builtin_leaf(type_name)
            elif type_name in self.complex_types:
                self.load_complex_type(self.complex_types[type_name], definition)
            elif type_name in self.simple_types:
                definition['leaf'] = self.simple_type_leaf(self.simple_types[type_name])
            else:
                raise SchemaModelError(_("unknown type {!r}").format(type_ref))
        else:
            for child in elem:
                if child.tag == nm.XSD_COMPLEX_TYPE:
                    self.load_complex_type(child, definition)
                    break
                elif child.tag == nm.XSD_SIMPLE_TYPE:
                    definition['leaf'] = self.simple_type_leaf(child)
                    break
            else:
                definition['leaf'] = LeafKind.text()  # xs:anyType

        return name

    @staticmethod
    def unsupported(elem: Element) -> None:
        """Rejects a construct that can't be represented by the schema model."""
        raise SchemaModelError(
            _("unsupported XSD construct {!r}").format(local_name(elem.tag)), elem.attrib
        )

    def get_global(self, elem: Element, components: dict[str, Element]) -> Element:
        ref = elem.get('ref')
        if ref is None:
            raise SchemaModelError(
                _("a local {!r} requires a ref").format(local_name(elem.tag)), elem.attrib
            )
        try:
            return components[local_name(ref)]
        except KeyError:
            msg = _("unresolved {} reference {!r}").format(local_name(elem.tag), ref)
            raise SchemaModelError(msg) from None

    def load_complex_type(self, elem: Element, definition: dict[str, Any]) -> None:
        for child in elem:
            if child.tag == nm.XSD_ANNOTATION:
                continue
            elif child.tag in (nm.XSD_SEQUENCE, nm.XSD_CHOICE, nm.XSD_ALL, nm.XSD_GROUP):
                self.load_group(child, definition['children'])
            elif child.tag in (nm.XSD_ATTRIBUTE, nm.XSD_ATTRIBUTE_GROUP):
                self.load_attribute(child, definition)
            elif child.tag == nm.XSD_SIMPLE_CONTENT:
                for content in child:
                    if content.tag == nm.XSD_ANNOTATION:
                        continue
                    elif content.tag not in (nm.XSD_EXTENSION, nm.XSD_RESTRICTION):
                        self.unsupported(content)

                    definition['leaf'] = self.base_leaf(content.get('base', 'xs:string'))
                    for item in content:
                        if item.tag in (nm.XSD_ATTRIBUTE, nm.XSD_ATTRIBUTE_GROUP):
                            self.load_attribute(item, definition)
                        elif item.tag == nm.XSD_ANY_ATTRIBUTE:
                            self.unsupported(item)
            elif child.tag == nm.XSD_COMPLEX_CONTENT:
                for content in child:
                    if content.tag == nm.XSD_ANNOTATION:
                        continue
                    elif content.tag not in (nm.XSD_EXTENSION, nm.XSD_RESTRICTION):
                        self.unsupported(content)

                    base_name, _is_builtin = self.get_type_name(content.get('base', ''))
                    if content.tag == nm.XSD_EXTENSION and base_name in self.complex_types:
                        self.load_complex_type(self.complex_types[base_name], definition)
                    self.load_complex_type(content, definition)
            else:
                self.unsupported(child)

    def load_group(self, elem: Element,
                   children: dict[str, tuple[int, Optional[int]]],
                   min_factor: int = 1,
                   repeated: bool = False) -> None:
        """Loads the particles of a model group, merging the occurrences."""
        group_min, group_max = self.get_occurs(elem)
        min_factor = min_factor if group_min else 0
        repeated = repeated or group_max is None or group_max > 1

        if elem.tag == nm.XSD_GROUP:
            group = self.get_global(elem, self.groups)
            name = group.get('name', '')
            if name in self._expanding:
                raise SchemaModelError(_("circular definition of group {!r}").format(name))

            self._expanding.append(name)
            try:
                for content in group:
                    if content.tag in (nm.XSD_SEQUENCE, nm.XSD_CHOICE, nm.XSD_ALL):
                        self.load_group(content, children, min_factor, repeated)
                    elif content.tag != nm.XSD_ANNOTATION:
                        self.unsupported(content)
            finally:
                self._expanding.pop()
            return

        if elem.tag == nm.XSD_CHOICE:
            min_factor = 0

        for child in elem:
            if child.tag in (nm.XSD_SEQUENCE, nm.XSD_CHOICE, nm.XSD_ALL, nm.XSD_GROUP):
                self.load_group(child, children, min_factor, repeated)
            elif child.tag == nm.XSD_ELEMENT:
                min_occurs, max_occurs = self.get_occurs(child)
                min_occurs *= min_factor
                if repeated:
                    max_occurs = None

                name = self.load_element(child)
                if name in children:
                    min_occurs += children[name][0]
                    max_occurs = None
                children[name] = min_occurs, max_occurs
            elif child.tag != nm.XSD_ANNOTATION:
                self.unsupported(child)

    def load_attribute(self, elem: Element, definition: dict[str, Any]) -> None:
        if elem.tag == nm.XSD_ATTRIBUTE_GROUP:
            group = self.get_global(elem, self.attribute_groups)
            name = group.get('name', '')
            if name in self._expanding:
                msg = _("circular definition of attribute group {!r}")
                raise SchemaModelError(msg.format(name))

            self._expanding.append(name)
            try:
                for child in group:
                    if child.tag in (nm.XSD_ATTRIBUTE, nm.XSD_ATTRIBUTE_GROUP):
                        self.load_attribute(child, definition)
                    elif child.tag != nm.XSD_ANNOTATION:
                        self.unsupported(child)
            finally:
                self._expanding.pop()
            return

        name = elem.get('name') or local_name(elem.get('ref', ''))
        if not name:
            raise SchemaModelError(_("an attribute declaration requires a name or a ref"))
        elif name not in definition['attributes']:
            definition['attributes'].append(name)

    @staticmethod
    def get_occurs(elem: Element) -> tuple[int, Optional[int]]:
        try:
            min_occurs = int(elem.get('minOccurs', '1'))
            max_occurs = elem.get('maxOccurs', '1')
            return min_occurs, None if max_occurs == 'unbounded' else int(max_occurs)
        except ValueError:
            raise SchemaModelError(_("invalid occurrence attributes"), elem.attrib) from None

    @staticmethod
    def builtin_leaf(type_name: str) -> LeafKind:
        if type_name in nm.XSD_NUMERIC_TYPES:
            return LeafKind.numeric()
        elif type_name in nm.XSD_DATE_TYPES:
            return LeafKind.date_format(type_name)
        return LeafKind.text()

    def base_leaf(self, qname: str) -> LeafKind:
        type_name, is_builtin = self.get_type_name(qname)
        if is_builtin:
            return self.builtin_leaf(type_name)
        elif type_name in self.simple_types:
            return self.simple_type_leaf(self.simple_types[type_name])
        elif type_name in self.complex_types:
            for content in self.complex_types[type_name].iter(nm.XSD_SIMPLE_CONTENT):
                for child in content:
                    if 'base' in child.attrib:
                        return self.base_leaf(child.attrib['base'])
        return LeafKind.text()

    def simple_type_leaf(self, elem: Element) -> LeafKind:
        for child in elem:
            if child.tag == nm.XSD_RESTRICTION:
                values = [e.get('value', '') for e in child if e.tag == nm.XSD_ENUMERATION]
                if values:
                    return LeafKind.enum(values)
                elif 'base' in child.attrib:
                    return self.base_leaf(child.attrib['base'])
                for item in child:
                    if item.tag == nm.XSD_SIMPLE_TYPE:
                        return self.simple_type_leaf(item)
        return LeafKind.text()  # xs:list and xs:union

    def mark_recursive_types(self) -> None:
        visiting: list[str] = []
        checked: set[str] = set()

        def iter_cycles(name: str) -> Iterator[str]:
            if name in checked:
                return
            visiting.append(name)
            for child_name in self.definitions[name]['children']:
                if child_name in visiting:
                    yield child_name
                else:
                    yield from iter_cycles(child_name)
            visiting.pop()
            checked.add(name)

        for type_name in list(self.definitions):
            for recursive_name in iter_cycles(type_name):
                logger.debug("Element type %r is recursive", recursive_name)
                self.definitions[recursive_name]['recursive'] = True


@logged
def from_xsd(source: SourceType,
             root: Optional[str] = None,
             name: Optional[str] = None,
             prefix: str = '',
             schema_location: Optional[str] = None,
             loglevel: Optional[Union[str, int]] = None) -> SchemaModel:
    """
    Builds a schema model from a subset of XML Schema 1.0.

    :param source: an XSD string, a path or a file-like object.
    :param root: the name of the root element, for default is the first \
    global element declared by the schema.
    :param name: the name of the schema, for default is the stem of the \
    file path, if any.
    :param prefix: the prefix to use for the root element tag.
    :param schema_location: an optional schema location hint for the documents.
    :param loglevel: for setting a different logging level for the loading.
    """
    if name is None:
        if isinstance(source, (str, Path)) and not is_inline_source(str(source)):
            name = Path(source).stem
        else:
            name = ''

    schema = XsdSubsetLoader(load_xml(source)).load(
        root, name=name, prefix=prefix, schema_location=schema_location
    )
    logger.info("Loaded schema %r with %d element types", schema.name, len(schema))
    return schema


@logged
def load_schema(source: SchemaSourceType,
                loglevel: Optional[Union[str, int]] = None,
                **kwargs: Any) -> SchemaModel:
    """
    Loads a schema model from a source. The kind of the source is detected
    from its type and its content.

    :param source: a schema model, a mapping, or a JSON or XSD source provided \
    as a string with data, a path or a file-like object.
    :param loglevel: for setting a different logging level for the loading.
    :param kwargs: other keyword arguments for :func:`from_xsd`.
    """
    if isinstance(source, SchemaModel):
        return source
    elif isinstance(source, Mapping):
        return from_mapping(source)

    name = kwargs.pop('name', None)
    if isinstance(source, (str, Path)) and not is_inline_source(str(source)):
        if str(source).lower().endswith('.json'):
            return from_json(source)
        elif name is None:
            name = Path(source).stem

    data = read_data(source)
    if data.lstrip()[:1] in ('<', b'<'):
        return from_xsd(data, name=name or '', **kwargs)
    elif kwargs:
        raise SchemaDocValueError(
            _("unexpected arguments {!r} for a JSON source").format(list(kwargs))
        )
    return from_json(data)


__all__ = ['SchemaSourceType', 'from_mapping', 'from_json',
           'from_xsd', 'load_schema', 'XsdSubsetLoader']

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
Helpers for reading XML and JSON sources. XML data is defused before
being parsed, forbidding entity declarations and external references.
"""
import io
import os
from pathlib import Path
from typing import IO, Union
from xml.dom import pulldom
from xml.etree import ElementTree
from xml.sax import SAXParseException
from xml.sax import expatreader  # type: ignore[attr-defined, unused-ignore]
from pyexpat import XMLParserType

from schemadoc.exceptions import SchemaDocTypeError, SchemaDocValueError, \
    SchemaDocOSError, XMLResourceForbidden
from schemadoc.translation import gettext as _

SourceType = Union[str, bytes, Path, IO[str], IO[bytes]]


class SafeExpatParser(expatreader.ExpatParser):  # type: ignore[misc, unused-ignore]
    _parser: XMLParserType

    def forbid_entity_declaration(self, name, is_parameter_entity,  # type: ignore
                                  value, base, sysid, pubid, notation_name):
        raise XMLResourceForbidden(f"Entities are forbidden (entity_name={name!r})")

    def forbid_unparsed_entity_declaration(self, name, base,  # type: ignore
                                           sysid, pubid, notation_name):
        raise XMLResourceForbidden(f"Unparsed entities are forbidden (entity_name={name!r})")

    def forbid_external_entity_reference(self, context, base, sysid, pubid):  # type: ignore
        raise XMLResourceForbidden(
            f"External references are forbidden (system_id={sysid!r}, public_id={pubid!r})"
        )  # pragma: no cover

    def reset(self) -> None:
        super().reset()
        self._parser.EntityDeclHandler = self.forbid_entity_declaration
        self._parser.UnparsedEntityDeclHandler = self.forbid_unparsed_entity_declaration
        self._parser.ExternalEntityRefHandler = self.forbid_external_entity_reference


def defuse_xml(data: Union[str, bytes]) -> Union[str, bytes]:
    """
    Checks XML data with a safe expat parser, stopping at the first start
    element. Raises :exc:`XMLResourceForbidden` if the prolog declares entities.
    Bytes are checked as they are, so the encoding of the XML declaration
    is honored.
    """
    parser = SafeExpatParser()
    stream = io.BytesIO(data) if isinstance(data, bytes) else io.StringIO(data)
    try:
        for event, node in pulldom.parse(stream, parser):
            if event == pulldom.START_ELEMENT:
                break
    except SAXParseException:
        pass  # the purpose is to defuse not to check xml source syntax
    return data


def is_inline_source(source: str, markers: str = '<{[') -> bool:
    """Returns `True` if the string looks like data instead of a path."""
    return source.lstrip()[:1] in markers if source.strip() else True


def read_data(source: SourceType) -> Union[str, bytes]:
    """
    Reads the full content of a source without decoding it. Files are opened
    in binary mode and closed in a scoped block. Strings with data and text
    file objects are returned as strings.
    """
    if isinstance(source, bytes):
        return source
    elif isinstance(source, str) and is_inline_source(source):
        return source
    elif isinstance(source, (str, Path, os.PathLike)):
        try:
            with open(source, 'rb') as fp:
                return fp.read()
        except OSError as err:
            raise SchemaDocOSError(err) from None
    elif hasattr(source, 'read'):
        data = source.read()
        if not isinstance(data, (str, bytes)):
            raise SchemaDocTypeError(_("a file-like source must read str or bytes"))
        return data
    else:
        raise SchemaDocTypeError(_("wrong type {!r} for source argument").format(type(source)))


def read_text(source: SourceType) -> str:
    """
    Reads the full content of a source, that can be a string with data, a path
    or a file-like object. Binary data must be UTF-8 encoded.
    """
    data = read_data(source)
    if isinstance(data, str):
        return data

    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as err:
        raise SchemaDocValueError(_("the source is not UTF-8 encoded: {}").format(err)) from None


def load_xml(source: SourceType) -> ElementTree.Element:
    """
    Reads, defuses and parses an XML source, returning its root element.
    Binary data is decoded by the parser, using the encoding of the XML
    declaration or UTF-8 if there is none.
    """
    data = defuse_xml(read_data(source))
    try:
        return ElementTree.fromstring(data)
    except ElementTree.ParseError as err:
        raise SchemaDocValueError(_("invalid XML source: {}").format(err)) from None

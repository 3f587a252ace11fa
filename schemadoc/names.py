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
This module contains namespace and name definitions used by schema loaders
and by the serializer.
"""

###
# Namespace URIs
XSD_NAMESPACE = 'http://www.w3.org/2001/XMLSchema'
"URI of the XML Schema Definition namespace (xs|xsd)"

XSI_NAMESPACE = 'http://www.w3.org/2001/XMLSchema-instance'
"URI of the XML Schema Instance namespace (xsi)"

EML_NAMESPACE = 'https://eml.ecoinformatics.org/eml-2.2.0'
"URI of the Ecological Metadata Language 2.2.0 namespace (eml)"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

###
# XSD tags
XSD_SCHEMA = f'{{{XSD_NAMESPACE}}}schema'
XSD_ELEMENT = f'{{{XSD_NAMESPACE}}}element'
XSD_ATTRIBUTE = f'{{{XSD_NAMESPACE}}}attribute'
XSD_COMPLEX_TYPE = f'{{{XSD_NAMESPACE}}}complexType'
XSD_SIMPLE_TYPE = f'{{{XSD_NAMESPACE}}}simpleType'
XSD_SEQUENCE = f'{{{XSD_NAMESPACE}}}sequence'
XSD_CHOICE = f'{{{XSD_NAMESPACE}}}choice'
XSD_ALL = f'{{{XSD_NAMESPACE}}}all'
XSD_SIMPLE_CONTENT = f'{{{XSD_NAMESPACE}}}simpleContent'
XSD_COMPLEX_CONTENT = f'{{{XSD_NAMESPACE}}}complexContent'
XSD_EXTENSION = f'{{{XSD_NAMESPACE}}}extension'
XSD_RESTRICTION = f'{{{XSD_NAMESPACE}}}restriction'
XSD_ENUMERATION = f'{{{XSD_NAMESPACE}}}enumeration'
XSD_GROUP = f'{{{XSD_NAMESPACE}}}group'
XSD_ATTRIBUTE_GROUP = f'{{{XSD_NAMESPACE}}}attributeGroup'
XSD_ANNOTATION = f'{{{XSD_NAMESPACE}}}annotation'
XSD_NOTATION = f'{{{XSD_NAMESPACE}}}notation'
XSD_INCLUDE = f'{{{XSD_NAMESPACE}}}include'
XSD_IMPORT = f'{{{XSD_NAMESPACE}}}import'
XSD_REDEFINE = f'{{{XSD_NAMESPACE}}}redefine'
XSD_OVERRIDE = f'{{{XSD_NAMESPACE}}}override'
XSD_ANY = f'{{{XSD_NAMESPACE}}}any'
XSD_ANY_ATTRIBUTE = f'{{{XSD_NAMESPACE}}}anyAttribute'

###
# Builtin XSD datatypes by leaf kind
XSD_TEXT_TYPES = frozenset((
    'string', 'normalizedString', 'token', 'anyURI', 'language', 'Name', 'NCName',
    'ID', 'IDREF', 'NMTOKEN', 'QName', 'boolean', 'anySimpleType', 'anyType',
))

XSD_NUMERIC_TYPES = frozenset((
    'decimal', 'float', 'double', 'integer', 'int', 'long', 'short', 'byte',
    'nonNegativeInteger', 'positiveInteger', 'nonPositiveInteger', 'negativeInteger',
    'unsignedLong', 'unsignedInt', 'unsignedShort', 'unsignedByte',
))

XSD_DATE_TYPES = frozenset((
    'date', 'dateTime', 'time', 'gYear', 'gYearMonth', 'gMonth', 'gMonthDay', 'gDay',
))

#
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
from . import translation
from .exceptions import SchemaDocException, SchemaDocValueError, SchemaDocTypeError, \
    SchemaDocKeyError, SchemaDocOSError, XMLResourceForbidden, SchemaModelError, \
    UnknownTypeError, UnknownChildOrAttributeError, MalformedNodeError, \
    DocumentValidationError
from .utils.logger import set_logging_level
from .schema import Cardinality, LeafKind, SchemaElementType, SchemaModel, \
    from_mapping, from_json, from_xsd, load_schema
from .document import DocumentNode
from .builders import Builders, BuilderHelper, element
from .validation import ValidationIssue, MissingRequiredChild, UnexpectedElement, \
    CardinalityViolation, BadLeafType, BadLeafFormat, UnexpectedAttribute, \
    iter_issues, validate, is_valid, assert_valid
from .serializer import serialize, to_etree, write
from .parser import parse
from .eml import load_eml_schema, attribute_list

__version__ = '1.0.0'
__author__ = "Davide Brunato"
__contact__ = "brunato@sissa.it"
__copyright__ = "Copyright 2016-2024, SISSA"
__license__ = "MIT"
__status__ = "Production/Stable"

__all__ = [
    'translation', 'SchemaDocException', 'SchemaDocValueError', 'SchemaDocTypeError',
    'SchemaDocKeyError', 'SchemaDocOSError', 'XMLResourceForbidden', 'SchemaModelError',
    'UnknownTypeError', 'UnknownChildOrAttributeError', 'MalformedNodeError',
    'DocumentValidationError', 'set_logging_level', 'Cardinality', 'LeafKind',
    'SchemaElementType', 'SchemaModel', 'from_mapping', 'from_json', 'from_xsd',
    'load_schema', 'DocumentNode', 'Builders', 'BuilderHelper', 'element',
    'ValidationIssue', 'MissingRequiredChild', 'UnexpectedElement',
    'CardinalityViolation', 'BadLeafType', 'BadLeafFormat', 'UnexpectedAttribute',
    'iter_issues', 'validate', 'is_valid', 'assert_valid', 'serialize', 'to_etree',
    'write', 'parse', 'load_eml_schema', 'attribute_list',
]

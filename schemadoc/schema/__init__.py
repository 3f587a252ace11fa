#
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
from .model import Cardinality, LeafKind, SchemaElementType, SchemaModel
from .leaves import check_leaf, leaf_text
from .loaders import SchemaSourceType, from_mapping, from_json, from_xsd, \
    load_schema, XsdSubsetLoader

__all__ = ['Cardinality', 'LeafKind', 'SchemaElementType', 'SchemaModel',
           'check_leaf', 'leaf_text', 'SchemaSourceType', 'from_mapping',
           'from_json', 'from_xsd', 'load_schema', 'XsdSubsetLoader']

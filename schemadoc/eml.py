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
Helpers for authoring Ecological Metadata Language (EML) documents with
the bundled subset of the EML 2.2.0 schema.

The subset relaxes a few EML rules that per-child cardinalities can't express.
A measurementScale requires exactly one of the five scales in EML, but here
all of them are optional, so an empty measurementScale is not reported by
the validator. The attribute lists built by :func:`attribute_list` always
have exactly one scale. Publication and calendar dates accept both a year
and a full date ('gYear|date'), like the yearDate type of EML.
"""
import functools
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from schemadoc.exceptions import SchemaDocValueError
from schemadoc.translation import gettext as _
from schemadoc.names import EML_NAMESPACE
from schemadoc.schema import SchemaModel, from_json
from schemadoc.document import DocumentNode
from schemadoc.builders import Builders

EML_SCHEMA_PATH = Path(__file__).parent.joinpath('schema/data/eml-2.2.0-subset.json')
EML_SCHEMA_LOCATION = f'{EML_NAMESPACE} {EML_NAMESPACE}/eml.xsd'

MEASUREMENT_SCALES = ('nominal', 'ordinal', 'interval', 'ratio', 'dateTime')
DOMAINS = ('textDomain', 'enumeratedDomain', 'numericDomain', 'dateTimeDomain')

DEFAULT_DOMAINS = {
    'nominal': 'textDomain',
    'ordinal': 'textDomain',
    'interval': 'numericDomain',
    'ratio': 'numericDomain',
    'dateTime': 'dateTimeDomain',
}


@functools.lru_cache(maxsize=None)
def load_eml_schema(schema_location: bool = False) -> SchemaModel:
    """
    Loads the bundled EML 2.2.0 subset schema. The model is immutable, so
    the same instance is returned by subsequent calls.

    :param schema_location: if `True` the serialized documents are marked \
    with an *xsi:schemaLocation* that points to the EML namespace.
    """
    if not schema_location:
        return from_json(EML_SCHEMA_PATH)

    schema = from_json(EML_SCHEMA_PATH)
    return SchemaModel(
        types=schema.values(),
        root=schema.root,
        name=schema.name,
        version=schema.version,
        namespace=schema.namespace,
        prefix=schema.prefix,
        schema_location=EML_SCHEMA_LOCATION,
    )


def _get_field(row: Mapping[str, Any], key: str) -> Any:
    value = row.get(key)
    if value is None or value == '':
        raise SchemaDocValueError(
            _("missing {!r} for attribute {!r}").format(key, row.get('attributeName'))
        )
    return value


def _iter_codes(codes: Any) -> Iterable[tuple[Any, Any]]:
    if isinstance(codes, Mapping):
        return codes.items()
    return [tuple(x) for x in codes]


def _non_numeric_domain(builders: Builders, row: Mapping[str, Any],
                        domain: str) -> DocumentNode:
    if domain == 'textDomain':
        definition = row.get('definition') or _get_field(row, 'attributeDefinition')
        return builders.nonNumericDomain(textDomain=builders.textDomain(definition=definition))
    elif domain == 'enumeratedDomain':
        code_definitions = [
            builders.codeDefinition(code=code, definition=definition)
            for code, definition in _iter_codes(_get_field(row, 'codes'))
        ]
        return builders.nonNumericDomain(
            enumeratedDomain=builders.enumeratedDomain(codeDefinition=code_definitions)
        )
    raise SchemaDocValueError(
        _("domain {!r} is not compatible with scale {!r}").format(
            domain, row['measurementScale'])
    )


def _measurement_scale(builders: Builders, row: Mapping[str, Any]) -> DocumentNode:
    scale = _get_field(row, 'measurementScale')
    if scale not in MEASUREMENT_SCALES:
        raise SchemaDocValueError(
            _("unknown measurement scale {!r}, must be one of {}").format(
                scale, ', '.join(MEASUREMENT_SCALES))
        )

    domain = row.get('domain') or DEFAULT_DOMAINS[scale]
    if domain not in DOMAINS:
        raise SchemaDocValueError(_("unknown domain {!r}").format(domain))

    if scale in ('nominal', 'ordinal'):
        node = builders[scale](nonNumericDomain=_non_numeric_domain(builders, row, domain))
    elif scale in ('interval', 'ratio'):
        if domain != 'numericDomain':
            raise SchemaDocValueError(
                _("domain {!r} is not compatible with scale {!r}").format(domain, scale)
            )
        node = builders[scale](
            unit=builders.unit(standardUnit=_get_field(row, 'unit')),
            numericDomain=builders.numericDomain(numberType=row.get('numberType') or 'real'),
        )
    else:
        if domain != 'dateTimeDomain':
            raise SchemaDocValueError(
                _("domain {!r} is not compatible with scale {!r}").format(domain, scale)
            )
        node = builders.dateTime(formatString=_get_field(row, 'formatString'))

    return builders.measurementScale(**{scale: node})


def attribute_list(builders: Builders, rows: Iterable[Mapping[str, Any]]) -> DocumentNode:
    """
    Builds an *attributeList* node from a sequence of rows that describe
    the columns of a data table. Each row is a mapping with these keys:

      * attributeName, attributeDefinition (required)
      * measurementScale: one of nominal, ordinal, interval, ratio, dateTime
      * domain: one of textDomain, enumeratedDomain, numericDomain, dateTimeDomain \
        (for default is the usual domain of the measurement scale)
      * definition: the text domain definition (for default the attribute definition)
      * unit, numberType: for interval and ratio scales
      * formatString: for dateTime scale
      * codes: a mapping or a sequence of couples, for enumerated domains

    :param builders: the builder helpers of an EML schema.
    :param rows: the attribute rows.
    :raises: :exc:`SchemaDocValueError` if a row is incomplete or inconsistent.
    """
    attributes = []
    for row in rows:
        attributes.append(builders.attribute(
            attributeName=_get_field(row, 'attributeName'),
            attributeDefinition=_get_field(row, 'attributeDefinition'),
            measurementScale=_measurement_scale(builders, row),
        ))

    if not attributes:
        raise SchemaDocValueError(_("an attribute list requires at least one attribute"))
    return builders.attributeList(attribute=attributes)

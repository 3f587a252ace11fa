#!/usr/bin/env python
#
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Tests of the EML helpers."""
import unittest

from schemadoc import Builders, load_eml_schema, attribute_list, validate, \
    serialize, SchemaDocValueError
from schemadoc.names import EML_NAMESPACE
from schemadoc.schema import Cardinality, LeafKind


class TestEmlSchema(unittest.TestCase):

    def test_bundled_schema(self):
        schema = load_eml_schema()
        self.assertIs(load_eml_schema(), schema)
        self.assertEqual(schema.name, 'eml')
        self.assertEqual(schema.version, '2.2.0')
        self.assertEqual(schema.namespace, EML_NAMESPACE)
        self.assertEqual(schema.prefix, 'eml')
        self.assertEqual(schema.root, 'eml')
        self.assertIsNone(schema.schema_location)
        self.assertEqual(schema.attributes('eml'), ('packageId', 'system', 'scope'))

    def test_eml_element_types(self):
        schema = load_eml_schema()
        self.assertEqual(schema.allowed_children('individualName'), [
            ('salutation', Cardinality.ZERO_OR_MORE),
            ('givenName', Cardinality.ZERO_OR_MORE),
            ('surName', Cardinality.REQUIRED),
        ])
        self.assertIs(schema['dataset'].get_cardinality('title'), Cardinality.ONE_OR_MORE)
        self.assertIs(schema['dataset'].get_cardinality('creator'), Cardinality.ONE_OR_MORE)
        self.assertIs(schema['dataset'].get_cardinality('contact'), Cardinality.ONE_OR_MORE)
        self.assertIs(schema['dataset'].get_cardinality('pubDate'), Cardinality.OPTIONAL)
        self.assertEqual(schema.leaf_kind('pubDate'), LeafKind.date_format('gYear|date'))
        self.assertEqual(schema.leaf_kind('calendarDate'), LeafKind.date_format('gYear|date'))
        self.assertEqual(schema.leaf_kind('westBoundingCoordinate'), LeafKind.numeric())
        self.assertEqual(schema.leaf_kind('numberType').kind, 'enum')
        self.assertTrue(schema['taxonomicClassification'].recursive)


    def test_year_or_date_values(self):
        schema = load_eml_schema()
        b = Builders(schema)

        for pub_date in ('2021', '2021-06-30'):
            doc = b.eml(packageId='example.1.1', system='local', dataset=b.dataset(
                title='Soil respiration',
                creator=b.creator(organizationName='Field station'),
                pubDate=pub_date,
                coverage={'temporalCoverage': {
                    'singleDateTime': {'calendarDate': pub_date[:4]}
                }},
                contact=b.contact(organizationName='Field station'),
            ))
            self.assertEqual(validate(doc, schema), [], msg=pub_date)

        doc[0].find('pubDate').value = '06/2021'
        self.assertEqual([x.kind for x in validate(doc, schema)], ['bad-leaf-format'])


class TestAttributeList(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.schema = load_eml_schema()
        cls.b = Builders(cls.schema)

    def make_data_table(self, attributes):
        b = self.b
        return b.eml(
            packageId='example.1.1',
            system='local',
            dataset=b.dataset(
                title='Soil respiration',
                creator=b.creator(organizationName='Field station'),
                contact=b.contact(organizationName='Field station'),
                dataTable=b.dataTable(entityName='respiration.csv', attributeList=attributes),
            ),
        )

    def test_attribute_list(self):
        rows = [
            {'attributeName': 'site', 'attributeDefinition': 'Site identifier',
             'measurementScale': 'nominal', 'domain': 'textDomain',
             'definition': 'Any text'},
            {'attributeName': 'treatment', 'attributeDefinition': 'Treatment code',
             'measurementScale': 'nominal', 'domain': 'enumeratedDomain',
             'codes': {'C': 'control', 'W': 'warmed'}},
            {'attributeName': 'flux', 'attributeDefinition': 'Soil CO2 flux',
             'measurementScale': 'ratio', 'unit': 'micromolePerMeterSquaredPerSecond',
             'numberType': 'real'},
            {'attributeName': 'date', 'attributeDefinition': 'Sampling date',
             'measurementScale': 'dateTime', 'formatString': 'YYYY-MM-DD'},
        ]
        attributes = attribute_list(self.b, rows)
        self.assertEqual(attributes.tag, 'attributeList')
        self.assertEqual(len(attributes), 4)
        self.assertEqual(validate(self.make_data_table(attributes), self.schema), [])

        site = attributes[0]
        self.assertEqual([x.tag for x in site],
                         ['attributeName', 'attributeDefinition', 'measurementScale'])
        self.assertEqual(site.find('measurementScale/nominal/nonNumericDomain/'
                                   'textDomain/definition').value, 'Any text')

        codes = attributes[1].findall('.//codeDefinition')
        self.assertEqual([(x[0].value, x[1].value) for x in codes],
                         [('C', 'control'), ('W', 'warmed')])

        flux = attributes[2]
        self.assertEqual(flux.find('.//standardUnit').value,
                         'micromolePerMeterSquaredPerSecond')
        self.assertEqual(flux.find('.//numberType').value, 'real')
        self.assertEqual(attributes[3].find('.//formatString').value, 'YYYY-MM-DD')
        for attribute in attributes:
            self.assertEqual(len(attribute.find('measurementScale')), 1)

        xml_data = serialize(attributes, self.schema, xml_declaration=False)
        self.assertIn('<dateTime><formatString>YYYY-MM-DD</formatString></dateTime>', xml_data)

    def test_default_domains(self):
        rows = [
            {'attributeName': 'plot', 'attributeDefinition': 'Plot name',
             'measurementScale': 'ordinal'},
            {'attributeName': 'temperature', 'attributeDefinition': 'Air temperature',
             'measurementScale': 'interval', 'unit': 'celsius'},
        ]
        attributes = attribute_list(self.b, rows)
        self.assertEqual(attributes[0].find('.//textDomain/definition').value, 'Plot name')
        self.assertEqual(attributes[1].find('.//numberType').value, 'real')
        self.assertEqual(validate(self.make_data_table(attributes), self.schema), [])

    def test_codes_as_couples(self):
        rows = [{'attributeName': 'treatment', 'attributeDefinition': 'Treatment code',
                 'measurementScale': 'ordinal', 'domain': 'enumeratedDomain',
                 'codes': [('1', 'low'), ('2', 'high')]}]
        attributes = attribute_list(self.b, rows)
        self.assertEqual([x.value for x in attributes.findall('.//code')], ['1', '2'])

    def test_invalid_rows(self):
        row = {'attributeName': 'site', 'attributeDefinition': 'Site identifier'}
        invalid_rows = [
            dict(row, measurementScale='categorical'),
            dict(row, measurementScale='nominal', domain='freeText'),
            dict(row, measurementScale='nominal', domain='numericDomain'),
            dict(row, measurementScale='nominal', domain='enumeratedDomain'),
            dict(row, measurementScale='ratio'),
            dict(row, measurementScale='ratio', unit='meter', domain='textDomain'),
            dict(row, measurementScale='dateTime'),
            dict(row, measurementScale='dateTime', formatString='YYYY', domain='textDomain'),
            {'attributeName': 'site', 'measurementScale': 'nominal'},
            {'attributeDefinition': 'Site identifier', 'measurementScale': 'nominal'},
            row,
        ]
        for invalid_row in invalid_rows:
            with self.assertRaises(SchemaDocValueError, msg=repr(invalid_row)):
                attribute_list(self.b, [invalid_row])

        with self.assertRaises(SchemaDocValueError):
            attribute_list(self.b, [])

    def test_unknown_scale_message(self):
        rows = [{'attributeName': 'site', 'attributeDefinition': 'Site identifier',
                 'measurementScale': 'categorical'}]
        with self.assertRaises(SchemaDocValueError) as ctx:
            attribute_list(self.b, rows)
        self.assertIn("'categorical'", str(ctx.exception))
        self.assertIn("nominal, ordinal, interval, ratio, dateTime", str(ctx.exception))


if __name__ == '__main__':
    import platform
    header_template = "Test schemadoc's EML helpers with Python {} on {}"
    header = header_template.format(platform.python_version(), platform.platform())
    print('{0}\n{1}\n{0}'.format("*" * len(header), header))

    unittest.main()

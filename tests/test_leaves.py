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
"""Tests of leaf value checks."""
import unittest
from decimal import Decimal

from schemadoc.schema import LeafKind, check_leaf, leaf_text
from schemadoc.schema.leaves import picture_regex, check_numeric, check_date_format


class TestLeafValues(unittest.TestCase):

    def test_leaf_text(self):
        self.assertIsNone(leaf_text(None))
        self.assertEqual(leaf_text('Clark'), 'Clark')
        self.assertEqual(leaf_text(34.42), '34.42')
        self.assertEqual(leaf_text(Decimal('-119.8')), '-119.8')
        self.assertEqual(leaf_text(7), '7')
        self.assertEqual(leaf_text(True), 'true')
        self.assertEqual(leaf_text(False), 'false')

    def test_check_numeric(self):
        self.assertIsNone(check_numeric(10))
        self.assertIsNone(check_numeric(-0.5))
        self.assertIsNone(check_numeric(Decimal('1.25')))
        self.assertIsNone(check_numeric('34.42'))
        self.assertIsNone(check_numeric(' 12 '))
        self.assertIsNone(check_numeric('1.5E3'))
        self.assertIsNotNone(check_numeric('forty-two'))
        self.assertIsNotNone(check_numeric(''))
        self.assertIsNotNone(check_numeric([1]))

    def test_picture_regex(self):
        self.assertIsNotNone(picture_regex('YYYY-MM-DD').match('2021-06-30'))
        self.assertIsNone(picture_regex('YYYY-MM-DD').match('30/06/2021'))
        self.assertIsNone(picture_regex('YYYY').match('2021-06'))
        self.assertIsNotNone(picture_regex('hh:mm:ss').match('12:30:00'))
        self.assertIsNotNone(picture_regex('YYYY.MM').match('2021.06'))
        self.assertIsNone(picture_regex('YYYY.MM').match('2021x06'))

    def test_check_date_format(self):
        self.assertIsNone(check_date_format('2021-06-30', 'date'))
        self.assertIsNotNone(check_date_format('2021-13-30', 'date'))
        self.assertIsNotNone(check_date_format('30/06/2021', 'date'))
        self.assertIsNone(check_date_format('2021', 'gYear'))
        self.assertIsNone(check_date_format(2021, 'gYear'))
        self.assertIsNone(check_date_format('2021-06-30T12:00:00', 'dateTime'))
        self.assertIsNone(check_date_format('30/06/2021', 'DD/MM/YYYY'))
        self.assertIsNotNone(check_date_format('2021-06-30', 'DD/MM/YYYY'))

    def test_check_alternative_date_formats(self):
        self.assertIsNone(check_date_format('2020', 'gYear|date'))
        self.assertIsNone(check_date_format('2020-06-30', 'gYear|date'))
        self.assertIsNone(check_date_format(' 2020 ', 'gYear|date'))
        self.assertIsNone(check_date_format('06/2020', 'gYear|MM/YYYY'))

        message = check_date_format('June 2020', 'gYear|date')
        self.assertIn("doesn't match any of the date formats 'gYear|date'", message)
        self.assertIsNotNone(check_date_format('2020-06', 'gYear|date'))
        self.assertIn('is not a valid xs:date', check_date_format('2020', 'date'))

    def test_check_text_leaf(self):
        self.assertIsNone(check_leaf('Clark', LeafKind.text()))
        self.assertIsNone(check_leaf(None, LeafKind.text()))
        self.assertIsNone(check_leaf(42, LeafKind.text()))

        kind, message = check_leaf(['Clark'], LeafKind.text())
        self.assertEqual(kind, 'bad-leaf-type')
        self.assertIn("'list'", message)

    def test_check_numeric_leaf(self):
        self.assertIsNone(check_leaf('-119.8', LeafKind.numeric()))
        self.assertIsNone(check_leaf(3, LeafKind.numeric()))
        self.assertEqual(check_leaf('abc', LeafKind.numeric())[0], 'bad-leaf-type')
        self.assertEqual(check_leaf(None, LeafKind.numeric())[0], 'bad-leaf-type')
        self.assertEqual(check_leaf(True, LeafKind.numeric())[0], 'bad-leaf-type')

    def test_check_enum_leaf(self):
        leaf = LeafKind.enum(['column', 'row'])
        self.assertIsNone(check_leaf('row', leaf))
        kind, message = check_leaf('diagonal', leaf)
        self.assertEqual(kind, 'bad-leaf-format')
        self.assertIn("'diagonal'", message)
        self.assertEqual(check_leaf(None, leaf)[0], 'bad-leaf-type')

    def test_check_date_leaf(self):
        leaf = LeafKind.date_format('date')
        self.assertIsNone(check_leaf('2021-06-30', leaf))
        self.assertEqual(check_leaf('30/06/2021', leaf)[0], 'bad-leaf-format')
        self.assertEqual(check_leaf(None, leaf)[0], 'bad-leaf-type')


if __name__ == '__main__':
    import platform
    header_template = "Test schemadoc's leaf values with Python {} on {}"
    header = header_template.format(platform.python_version(), platform.platform())
    print('{0}\n{1}\n{0}'.format("*" * len(header), header))

    unittest.main()

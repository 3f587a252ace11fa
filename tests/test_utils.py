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
"""Tests on internal helper functions"""
import unittest
import gettext
import logging
import pathlib
import struct
import tempfile

from schemadoc import translation, DocumentNode, SchemaDocValueError, SchemaDocTypeError
from schemadoc.utils.logger import get_level, set_logging_level, logging_level, logged
from schemadoc.utils.qnames import get_namespace, local_name


class TestUtils(unittest.TestCase):

    def test_get_namespace(self):
        self.assertEqual(get_namespace(''), '')
        self.assertEqual(get_namespace('local'), '')
        self.assertEqual(get_namespace('eml:eml'), '')
        self.assertEqual(get_namespace('{https://eml.ecoinformatics.org/eml-2.2.0}eml'),
                         'https://eml.ecoinformatics.org/eml-2.2.0')
        self.assertEqual(get_namespace('{wrong'), '')
        with self.assertRaises(SchemaDocTypeError):
            get_namespace(1)

    def test_local_name(self):
        self.assertEqual(local_name('eml'), 'eml')
        self.assertEqual(local_name('eml:eml'), 'eml')
        self.assertEqual(local_name('{https://eml.ecoinformatics.org/eml-2.2.0}dataset'),
                         'dataset')
        self.assertEqual(local_name(''), '')

        with self.assertRaises(SchemaDocValueError):
            local_name('a:b:c')
        with self.assertRaises(SchemaDocTypeError):
            local_name(None)

    def test_set_logging_level(self):
        logger = logging.getLogger('schemadoc')
        current_level = logger.level
        try:
            self.assertRaises(TypeError, set_logging_level, None)
            self.assertEqual(logger.level, current_level)

            set_logging_level(logging.DEBUG)
            self.assertEqual(logger.level, logging.DEBUG)

            set_logging_level(' error ')
            self.assertEqual(logger.level, logging.ERROR)

            self.assertRaises(ValueError, set_logging_level, 'WRONG')
            self.assertRaises(SchemaDocValueError, set_logging_level, 'WRONG')
        finally:
            logger.setLevel(current_level)

    def test_get_level(self):
        self.assertEqual(get_level('debug'), logging.DEBUG)
        self.assertEqual(get_level(' Warn '), logging.WARNING)
        self.assertEqual(get_level(logging.ERROR), logging.ERROR)
        self.assertEqual(get_level(5), 5)

        self.assertRaises(SchemaDocValueError, get_level, 'verbose')
        self.assertRaises(SchemaDocValueError, get_level, -1)
        self.assertRaises(SchemaDocTypeError, get_level, 10.0)
        self.assertRaises(SchemaDocTypeError, get_level, True)

    def test_logging_level_context(self):
        logger = logging.getLogger('schemadoc')
        current_level = logger.level

        with logging_level('INFO') as ctx_logger:
            self.assertIs(ctx_logger, logger)
            self.assertEqual(logger.level, logging.INFO)
        self.assertEqual(logger.level, current_level)

        with self.assertRaises(SchemaDocValueError):
            with logging_level('WRONG'):
                pass  # pragma: no cover
        self.assertEqual(logger.level, current_level)

        with self.assertRaises(KeyError):
            with logging_level(logging.DEBUG):
                raise KeyError('a')
        self.assertEqual(logger.level, current_level)

    def test_logged_decorator(self):
        logger = logging.getLogger('schemadoc')

        def func(*args, **kwargs):
            logger.warning('Warning log line')
            logger.info('Info log line')
            logger.debug('Debug log line')

        with self.assertLogs('schemadoc', level='DEBUG') as ctx:
            logged(func)(loglevel='ERROR')
            self.assertEqual(logger.level, logging.DEBUG)
            self.assertEqual(len(ctx.output), 0)

            logged(func)(loglevel='WARNING')
            self.assertEqual(logger.level, logging.DEBUG)
            self.assertEqual(len(ctx.output), 1)
            self.assertIn("Warning log line", ctx.output[-1])

            logged(func)(loglevel=logging.INFO)
            self.assertEqual(logger.level, logging.DEBUG)
            self.assertEqual(len(ctx.output), 3)
            self.assertIn("Info log line", ctx.output[-1])

            logged(func)()
            self.assertEqual(len(ctx.output), 6)
            self.assertIn("Debug log line", ctx.output[-1])

            with self.assertRaises(SchemaDocValueError):
                logged(func)(loglevel='WRONG')
            self.assertEqual(logger.level, logging.DEBUG)
            self.assertEqual(len(ctx.output), 6)


def write_catalog(filepath, messages):
    """Writes a GNU gettext binary catalog, little endian, without hash table."""
    keys = sorted(messages)
    ids = strs = b''
    offsets = []
    for key in keys:
        msgid, msgstr = key.encode('utf-8'), messages[key].encode('utf-8')
        offsets.append((len(ids), len(msgid), len(strs), len(msgstr)))
        ids += msgid + b'\0'
        strs += msgstr + b'\0'

    keys_start = 7 * 4 + 16 * len(keys)
    values_start = keys_start + len(ids)
    key_offsets, value_offsets = [], []
    for id_offset, id_length, str_offset, str_length in offsets:
        key_offsets += [id_length, id_offset + keys_start]
        value_offsets += [str_length, str_offset + values_start]

    header = struct.pack('<7I', 0x950412de, 0, len(keys), 7 * 4,
                         7 * 4 + len(keys) * 8, 0, 0)
    table = struct.pack('<%dI' % (4 * len(keys)), *(key_offsets + value_offsets))
    filepath.parent.mkdir(parents=True)
    filepath.write_bytes(header + table + ids + strs)


class TestTranslations(unittest.TestCase):

    translation_classes = (gettext.NullTranslations, gettext.GNUTranslations)

    def test_activation(self):
        self.assertIsNone(translation._translation)
        try:
            with self.assertLogs('schemadoc', level='WARNING') as ctx:
                self.assertFalse(translation.activate(languages=['xx']))
            self.assertIn("No 'schemadoc' message catalog found", ctx.output[0])
            self.assertIsInstance(translation._translation, self.translation_classes)
            self.assertEqual(translation.gettext("a message"), "a message")
        finally:
            translation.deactivate()
        self.assertIsNone(translation._translation)

    def test_catalog(self):
        message = "a node tag must be a not empty string"
        with tempfile.TemporaryDirectory() as dirname:
            localedir = pathlib.Path(dirname)
            write_catalog(localedir.joinpath('it/LC_MESSAGES/schemadoc.mo'), {
                message: "il tag di un nodo deve essere una stringa non vuota",
            })
            try:
                self.assertTrue(translation.activate(localedir, languages=['it']))
                self.assertIsInstance(translation._translation, gettext.GNUTranslations)
                self.assertEqual(translation.gettext("a message"), "a message")

                with self.assertRaises(SchemaDocTypeError) as ctx:
                    DocumentNode('')
                self.assertEqual(str(ctx.exception),
                                 "il tag di un nodo deve essere una stringa non vuota")
            finally:
                translation.deactivate()

        with self.assertRaises(SchemaDocTypeError) as ctx:
            DocumentNode('')
        self.assertEqual(str(ctx.exception), message)

    def test_installation(self):
        import builtins

        try:
            with self.assertLogs('schemadoc', level='WARNING'):
                translation.activate(languages=['it'], install=True)
            self.assertTrue(translation._installed)
            self.assertEqual(builtins.__dict__.get('_'), translation._translation.gettext)
        finally:
            translation.deactivate()
        self.assertFalse(translation._installed)

    def test_no_fallback(self):
        with self.assertRaises(OSError):
            translation.activate(languages=['xx'], fallback=False)
        self.assertIsNone(translation._translation)


if __name__ == '__main__':
    import platform
    header_template = "Test schemadoc's helpers with Python {} on {}"
    header = header_template.format(platform.python_version(), platform.platform())
    print('{0}\n{1}\n{0}'.format("*" * len(header), header))

    unittest.main()

#
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
# mypy: ignore-errors
"""Command Line Interface"""
import sys
import os
import argparse
import logging

from schemadoc.exceptions import SchemaDocException
from schemadoc.schema import load_schema
from schemadoc.parser import parse
from schemadoc.validation import validate as validate_tree
from schemadoc.eml import load_eml_schema

PROGRAM_NAME = os.path.basename(sys.argv[0])


def get_loglevel(verbosity):
    if verbosity <= 0:
        return logging.ERROR
    elif verbosity == 1:
        return logging.WARNING
    elif verbosity == 2:
        return logging.INFO
    else:
        return logging.DEBUG


def validate():
    parser = argparse.ArgumentParser(prog=PROGRAM_NAME, add_help=True,
                                     description="validate a set of XML documents.")
    parser.usage = "%(prog)s [OPTION]... [FILE]...\n" \
                   "Try '%(prog)s --help' for more information."
    parser.add_argument('-v', dest='verbosity', action='count', default=0,
                        help="increase output verbosity.")
    parser.add_argument('--schema', type=str, metavar='PATH',
                        help="path to a JSON or XSD schema (default is the "
                             "bundled EML 2.2.0 subset).")
    parser.add_argument('files', metavar='[XML_FILE ...]', nargs='+',
                        help="XML files to be validated.")

    args = parser.parse_args()

    try:
        if args.schema is None:
            schema = load_eml_schema()
        else:
            schema = load_schema(args.schema, loglevel=get_loglevel(args.verbosity))
    except SchemaDocException as err:
        sys.stderr.write(f"{err}\n")
        sys.exit(1)

    tot_errors = 0
    for filepath in args.files:
        try:
            issues = validate_tree(parse(filepath, schema), schema)
        except SchemaDocException as err:
            tot_errors += 1
            sys.stderr.write(f"{err}\n")
            continue
        else:
            if not issues:
                sys.stdout.write(f"{filepath} is valid\n")
            else:
                tot_errors += len(issues)
                sys.stderr.write(f"{filepath} is not valid\n")
                if args.verbosity > 0:
                    for issue in issues:
                        sys.stderr.write(f"{issue}\n")

    sys.exit(tot_errors)

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
This module contains the classes of the in-memory schema model: cardinalities,
leaf kinds, element types and the schema container.
"""
from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, NamedTuple, Optional, Union

from schemadoc.exceptions import SchemaModelError, UnknownTypeError
from schemadoc.translation import gettext as _
from schemadoc.names import XSD_DATE_TYPES

DATE_PICTURE_CHARS = frozenset("YMDhms")


class Cardinality(Enum):
    """How many times a child element type may or must appear under its parent."""
    REQUIRED = 'required'
    OPTIONAL = 'optional'
    ZERO_OR_MORE = 'zero-or-more'
    ONE_OR_MORE = 'one-or-more'

    @property
    def min_occurs(self) -> int:
        return 1 if self in (Cardinality.REQUIRED, Cardinality.ONE_OR_MORE) else 0

    @property
    def max_occurs(self) -> Optional[int]:
        """Maximum occurrences, `None` means unbounded."""
        return 1 if self in (Cardinality.REQUIRED, Cardinality.OPTIONAL) else None

    @property
    def is_repeatable(self) -> bool:
        return self.max_occurs is None

    @classmethod
    def from_occurs(cls, min_occurs: int, max_occurs: Optional[int]) -> 'Cardinality':
        """Maps a minOccurs/maxOccurs couple to the nearest cardinality."""
        if max_occurs is not None and max_occurs <= 1:
            return cls.REQUIRED if min_occurs >= 1 else cls.OPTIONAL
        return cls.ONE_OR_MORE if min_occurs >= 1 else cls.ZERO_OR_MORE


class LeafKind(NamedTuple):
    """
    The kind of a leaf value.

    :param kind: one of 'text', 'numeric', 'enum' or 'date-format'.
    :param values: the admitted values of an enumeration.
    :param format: the format of a date, either the name of an XSD date/time \
    builtin type or a picture string like 'YYYY-MM-DD'.
    """
    kind: str
    values: tuple[str, ...] = ()
    format: Optional[str] = None

    KINDS = ('text', 'numeric', 'enum', 'date-format')

    @classmethod
    def text(cls) -> 'LeafKind':
        return cls('text')

    @classmethod
    def numeric(cls) -> 'LeafKind':
        return cls('numeric')

    @classmethod
    def enum(cls, values: Iterable[Any]) -> 'LeafKind':
        return cls('enum', values=tuple(str(v) for v in values))

    @classmethod
    def date_format(cls, fmt: str = 'date') -> 'LeafKind':
        return cls('date-format', format=fmt)

    def __str__(self) -> str:
        if self.kind == 'enum':
            return 'enum{%s}' % ', '.join(self.values)
        elif self.kind == 'date-format':
            return 'date-format{%s}' % self.format
        return self.kind

    @classmethod
    def parse(cls, obj: Union[str, Mapping[str, Any], 'LeafKind']) -> 'LeafKind':
        """Builds a leaf kind from a string or a mapping of a schema definition."""
        if isinstance(obj, LeafKind):
            return obj
        elif isinstance(obj, str):
            kind, arguments = obj, {}
        elif isinstance(obj, Mapping):
            arguments = dict(obj)
            try:
                kind = arguments.pop('kind')
            except KeyError:
                raise SchemaModelError(_("missing 'kind' in leaf definition"), obj) from None
        else:
            raise SchemaModelError(_("invalid leaf definition"), obj)

        if kind == 'text':
            return cls.text()
        elif kind == 'numeric':
            return cls.numeric()
        elif kind == 'enum':
            values = arguments.get('values')
            if not values or isinstance(values, str):
                raise SchemaModelError(_("an enum leaf requires a list of values"), obj)
            return cls.enum(values)
        elif kind == 'date-format':
            fmt = arguments.get('format', 'date')
            if not isinstance(fmt, str) or not fmt:
                raise SchemaModelError(_("a date-format leaf requires a format string"), obj)
            for item in fmt.split('|'):
                if not item or item not in XSD_DATE_TYPES and \
                        any(c.isalpha() and c not in DATE_PICTURE_CHARS for c in item):
                    raise SchemaModelError(_("unknown date type {!r}").format(item), obj)
            return cls.date_format(fmt)
        raise SchemaModelError(
            _("unknown leaf kind {!r}, must be one of {!r}").format(kind, cls.KINDS), obj
        )


class SchemaElementType:
    """
    A named element type of a schema model.

    :param name: the unique name of the element type.
    :param children: an ordered sequence of couples with the name of an allowed \
    child type and its cardinality.
    :param leaf: the kind of the leaf value, `None` if the type has no value.
    :param attributes: the names of the admitted attributes.
    :param recursive: if `True` the type can appear among its own descendants.
    """
    __slots__ = ('name', 'children', 'leaf', 'attributes', 'recursive', '_index')

    name: str
    children: tuple[tuple[str, Cardinality], ...]
    leaf: Optional[LeafKind]
    attributes: tuple[str, ...]
    recursive: bool

    def __init__(self, name: str,
                 children: Iterable[tuple[str, Union[str, Cardinality]]] = (),
                 leaf: Optional[LeafKind] = None,
                 attributes: Iterable[str] = (),
                 recursive: bool = False) -> None:
        if not name or not isinstance(name, str):
            raise SchemaModelError(_("an element type requires a not empty name"))

        _children = []
        for child_name, cardinality in children:
            try:
                _children.append((child_name, Cardinality(cardinality)))
            except ValueError:
                msg = _("invalid cardinality {!r} for child {!r} of {!r}")
                raise SchemaModelError(msg.format(cardinality, child_name, name)) from None

        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'children', tuple(_children))
        object.__setattr__(self, 'leaf', leaf)
        object.__setattr__(self, 'attributes', tuple(attributes))
        object.__setattr__(self, 'recursive', recursive)
        object.__setattr__(self, '_index', {k: pos for pos, (k, _c) in enumerate(_children)})

        if len(self._index) != len(self.children):
            raise SchemaModelError(_("duplicate child declarations in {!r}").format(name))
        elif leaf is not None and self.children:
            raise SchemaModelError(
                _("element type {!r} can't have both a leaf value and children").format(name)
            )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(_("{!r} object is immutable").format(self.__class__.__name__))

    def __repr__(self) -> str:
        return '%s(name=%r)' % (self.__class__.__name__, self.name)

    @property
    def is_leaf(self) -> bool:
        return self.leaf is not None

    @property
    def child_names(self) -> tuple[str, ...]:
        return tuple(x[0] for x in self.children)

    def get_cardinality(self, child_name: str) -> Optional[Cardinality]:
        try:
            return self.children[self._index[child_name]][1]
        except KeyError:
            return None

    def child_position(self, child_name: str) -> Optional[int]:
        """The position of a child type in the declared order, `None` if not allowed."""
        return self._index.get(child_name)

    def is_allowed_child(self, child_name: str) -> bool:
        return child_name in self._index


class SchemaModel(Mapping[str, SchemaElementType]):
    """
    An immutable schema model, a read-only mapping from type names to element types.

    :param types: the element types of the schema.
    :param root: the name of the root type.
    :param name: the name of the schema.
    :param version: the version of the schema.
    :param namespace: the target namespace URI of the documents.
    :param prefix: the prefix of the root tag, if empty the namespace is \
    declared as default namespace.
    :param schema_location: an optional location hint for the schema, rendered \
    as `xsi:schemaLocation` attribute of the root element.
    """
    def __init__(self, types: Iterable[SchemaElementType],
                 root: str,
                 name: str = '',
                 version: str = '',
                 namespace: str = '',
                 prefix: str = '',
                 schema_location: Optional[str] = None) -> None:
        _types: dict[str, SchemaElementType] = {}
        for xsd_type in types:
            if xsd_type.name in _types:
                raise SchemaModelError(_("duplicate element type {!r}").format(xsd_type.name))
            _types[xsd_type.name] = xsd_type

        self._types = MappingProxyType(_types)
        self.root = root
        self.name = name
        self.version = version
        self.namespace = namespace
        self.prefix = prefix
        self.schema_location = schema_location
        self._check_model()

    def __repr__(self) -> str:
        return '%s(name=%r, version=%r, root=%r)' % (
            self.__class__.__name__, self.name, self.version, self.root
        )

    def __getitem__(self, name: str) -> SchemaElementType:
        return self._types[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def _check_model(self) -> None:
        if self.root not in self._types:
            raise SchemaModelError(_("root type {!r} is not registered").format(self.root))

        for xsd_type in self._types.values():
            for child_name in xsd_type.child_names:
                if child_name not in self._types:
                    msg = _("child {!r} of element type {!r} is not registered")
                    raise SchemaModelError(msg.format(child_name, xsd_type.name))

        # Detect cycles not going through a recursive type
        visiting: set[str] = set()
        checked: set[str] = set()

        def check_acyclic(name: str) -> None:
            if name in checked:
                return
            visiting.add(name)
            for child_name in self._types[name].child_names:
                if child_name in visiting:
                    if not self._types[child_name].recursive:
                        msg = _("circular definition detected for element type {!r}")
                        raise SchemaModelError(msg.format(child_name))
                    continue
                check_acyclic(child_name)
            visiting.discard(name)
            checked.add(name)

        for name in self._types:
            check_acyclic(name)

    @property
    def root_type(self) -> SchemaElementType:
        return self._types[self.root]

    @property
    def qualified_root(self) -> str:
        """The tag of the root element as it's rendered in documents."""
        return f'{self.prefix}:{self.root}' if self.prefix else self.root

    def is_registered(self, name: str) -> bool:
        return name in self._types

    def resolve(self, name: str) -> SchemaElementType:
        """
        Returns the element type registered with the name.

        :raises: :exc:`UnknownTypeError` if the name is not registered.
        """
        try:
            return self._types[name]
        except (KeyError, TypeError):
            raise UnknownTypeError(name, self.name or None) from None

    def allowed_children(self, name: str) -> list[tuple[str, Cardinality]]:
        return list(self.resolve(name).children)

    def leaf_kind(self, name: str) -> Optional[LeafKind]:
        return self.resolve(name).leaf

    def attributes(self, name: str) -> tuple[str, ...]:
        return self.resolve(name).attributes

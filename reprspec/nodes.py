# Copyright (c) 2026 NASK. All rights reserved.

"""
The generic, format-agnostic document tree.

A document is a tree of *nodes*; each of them is an instance of one
of the three (immutable) classes:

* :class:`Scalar` -- a leaf holding a raw value (or `None`, i.e., an
  explicit *null*);
* :class:`Sequence` -- an ordered list of nodes (optionally with a
  layout hint: `style`);
* :class:`Mapping` -- an ordered list of :class:`Entry` items, each
  being a `(key, node, is_attribute)` triple.

Any node can also be *tagged* (`tag`), e.g., with the name of an XML
element it comes from or is to be rendered as.

>>> doc = Mapping.from_pairs([
...     ('forename', Scalar('Peter')),
...     ('origin', Mapping.from_pairs([('title', Scalar('Neverland'))])),
...     ('songs', Sequence((Scalar('Fly'), Scalar('Crow')), style='flow')),
... ])
>>> doc.to_plain() == {
...     'forename': 'Peter',
...     'origin': {'title': 'Neverland'},
...     'songs': ['Fly', 'Crow'],
... }
True
>>> doc.lookup('forename')
Scalar(value='Peter', tag=None)
>>> doc.lookup('surename') is None
True
>>> from_plain(doc.to_plain()) == doc.replace_styles(None)
True
"""


import collections.abc as collections_abc
import dataclasses
from typing import (
    Any,
    NamedTuple,
    Optional,
    Union,
)


@dataclasses.dataclass(frozen=True)
class Scalar:

    value: Any
    tag: Optional[str] = None

    def to_plain(self):
        return self.value

    def replace_styles(self, style):
        return self


@dataclasses.dataclass(frozen=True)
class Sequence:

    items: tuple = ()
    tag: Optional[str] = None
    style: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.items, tuple):
            object.__setattr__(self, 'items', tuple(self.items))

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    @property
    def is_flow_style(self):
        return self.style in ('flow', 'inline')

    def to_plain(self):
        return [node.to_plain() for node in self.items]

    def replace_styles(self, style):
        """Get a copy of the subtree with all `style` hints set to `style`."""
        return dataclasses.replace(
            self,
            items=tuple(node.replace_styles(style) for node in self.items),
            style=style)


class Entry(NamedTuple):

    key: Any
    node: 'GenericNode'
    is_attribute: bool = False


@dataclasses.dataclass(frozen=True)
class Mapping:

    entries: tuple = ()
    tag: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.entries, tuple):
            object.__setattr__(self, 'entries', tuple(self.entries))

    @classmethod
    def from_pairs(cls, pairs, tag=None):
        """
        Make a mapping node from `(key, node)` pairs (non-attribute ones).
        """
        return cls(tuple(Entry(key, node) for key, node in pairs), tag=tag)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)

    def keys(self):
        return [entry.key for entry in self.entries]

    def lookup(self, key, attribute=False):
        """
        Get the node placed under the given key.

        Args:
            `key`: The document key.

        Kwargs:
            `attribute` (default: False):
                Whether the attribute placement is preferred (otherwise
                the child placement is).  If no entry with the preferred
                placement exists, an entry with the other placement is
                accepted (as plain formats, such as JSON, do not
                distinguish between them).

        Returns:
            The node, or `None` if the key is absent.

        >>> m = Mapping((Entry('id', Scalar('1'), True), Entry('id', Scalar('2'))))
        >>> m.lookup('id').value
        '2'
        >>> m.lookup('id', attribute=True).value
        '1'
        >>> Mapping((Entry('id', Scalar('1'), True),)).lookup('id').value
        '1'
        """
        fallback = None
        for entry in self.entries:
            if entry.key == key:
                if entry.is_attribute == attribute:
                    return entry.node
                if fallback is None:
                    fallback = entry.node
        return fallback

    def to_plain(self):
        return {entry.key: entry.node.to_plain() for entry in self.entries}

    def replace_styles(self, style):
        return dataclasses.replace(
            self,
            entries=tuple(entry._replace(node=entry.node.replace_styles(style))
                          for entry in self.entries))


GenericNode = Union[Scalar, Sequence, Mapping]


def from_plain(obj, tag=None):
    """
    Convert plain Python data (as produced by `json.loads()`,
    `yaml.safe_load()` and the like) to a node.

    >>> from_plain({'a': [1, None, {'b': False}]})   # doctest: +NORMALIZE_WHITESPACE
    Mapping(entries=(Entry(key='a',
                           node=Sequence(items=(Scalar(value=1, tag=None),
                                                Scalar(value=None, tag=None),
                                                Mapping(entries=(Entry(key='b',
                                                                       node=Scalar(value=False, tag=None),
                                                                       is_attribute=False),),
                                                        tag=None)),
                                         tag=None, style=None),
                           is_attribute=False),),
            tag=None)
    """
    if isinstance(obj, collections_abc.Mapping):
        return Mapping(tuple(Entry(key, from_plain(value))
                             for key, value in obj.items()),
                       tag=tag)
    if isinstance(obj, (list, tuple)):
        return Sequence(tuple(from_plain(item) for item in obj), tag=tag)
    return Scalar(obj, tag=tag)

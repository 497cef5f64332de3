# Copyright (c) 2026 NASK. All rights reserved.

import decimal

import yaml

from reprspec.encoding_helpers import ascii_str
from reprspec.exceptions import MalformedDocumentError
from reprspec.formats.base import FormatAdapter
from reprspec.nodes import (
    Mapping,
    Sequence,
    from_plain,
)


class _FlowList(list):
    """A list to be dumped in the flow (inline) style."""


class _Dumper(yaml.SafeDumper):

    # no anchors/aliases (a document tree is never a graph)
    def ignore_aliases(self, data):
        return True


def _represent_flow_list(dumper, data):
    return dumper.represent_sequence('tag:yaml.org,2002:seq', data, flow_style=True)


def _represent_decimal(dumper, data):
    return dumper.represent_str(str(data))


_Dumper.add_representer(_FlowList, _represent_flow_list)
_Dumper.add_representer(decimal.Decimal, _represent_decimal)


class YAMLFormat(FormatAdapter):

    r"""
    The YAML format adapter (based on *PyYAML*).

    Sequences are dumped in the block style, except those whose `style`
    is `'flow'` (or `'inline'`).

    >>> from reprspec.nodes import Mapping, Scalar, Sequence
    >>> node = Mapping.from_pairs([
    ...     ('title', Scalar('Fly')),
    ...     ('composers', Sequence((Scalar('Hook'), Scalar('Smee')), style='flow')),
    ...     ('lines', Sequence((Scalar(1), Scalar(2)))),
    ... ])
    >>> print(YAMLFormat(settings={}).serialize(node).decode('utf-8'), end='')
    title: Fly
    composers: [Hook, Smee]
    lines:
    - 1
    - 2
    >>> YAMLFormat(settings={}).deserialize(b'title: Fly\nlines: [1, 2]\n').to_plain()
    {'title': 'Fly', 'lines': [1, 2]}
    >>> YAMLFormat(settings={}).deserialize(b'title: [Fly')    # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    MalformedDocumentError: ...
    """

    format_name = 'yaml'
    media_type = 'application/yaml'
    config_section_name = 'reprspec.yaml'

    def serialize(self, node):
        try:
            text = yaml.dump(_to_yaml_data(node),
                             Dumper=_Dumper,
                             default_flow_style=False,
                             allow_unicode=self.config['allow_unicode'],
                             sort_keys=False)
        except yaml.YAMLError as exc:
            raise MalformedDocumentError('cannot serialize the document as YAML '
                                         '({})'.format(ascii_str(exc))) from exc
        return text.encode('utf-8')

    def deserialize(self, data):
        try:
            obj = yaml.safe_load(data)
        except yaml.YAMLError as exc:
            raise MalformedDocumentError('invalid YAML document ({})'.format(
                ascii_str(exc))) from exc
        return from_plain(obj)


def _to_yaml_data(node):
    if isinstance(node, Sequence):
        items = [_to_yaml_data(item) for item in node.items]
        return _FlowList(items) if node.is_flow_style else items
    if isinstance(node, Mapping):
        return {entry.key: _to_yaml_data(entry.node) for entry in node.entries}
    return node.value

# Copyright (c) 2026 NASK. All rights reserved.

import datetime
import decimal
import json

from reprspec.encoding_helpers import ascii_str
from reprspec.exceptions import MalformedDocumentError
from reprspec.formats.base import FormatAdapter
from reprspec.nodes import (
    Mapping,
    Scalar,
    Sequence,
    from_plain,
)


class JSONFormat(FormatAdapter):

    r"""
    The JSON format adapter (based on the standard library's :mod:`json`).

    Dates, times and decimals are serialized as strings (so, to get
    them back when parsing, declare the `type` of the properties).

    If the `indent` config option is set, sequences whose `style` is
    `'flow'` (or `'inline'`) are kept on one line.

    >>> from reprspec.nodes import Mapping, Scalar, Sequence
    >>> node = Mapping.from_pairs([
    ...     ('title', Scalar('Fly')),
    ...     ('composers', Sequence((Scalar('Hook'), Scalar('Smee')), style='flow')),
    ...     ('lines', Sequence((Scalar(1), Scalar(2)))),
    ... ])
    >>> print(JSONFormat(settings={}).serialize(node).decode('utf-8'))
    {"title": "Fly", "composers": ["Hook", "Smee"], "lines": [1, 2]}
    >>> print(JSONFormat(settings={}, indent=2).serialize(node).decode('utf-8'))
    {
      "title": "Fly",
      "composers": ["Hook", "Smee"],
      "lines": [
        1,
        2
      ]
    }
    >>> JSONFormat(settings={}).deserialize(b'{"title": "Fly"}').to_plain()
    {'title': 'Fly'}
    >>> JSONFormat(settings={}).deserialize(b'{"title": ')    # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    MalformedDocumentError: ...
    """

    format_name = 'json'
    media_type = 'application/json'
    config_section_name = 'reprspec.json'

    def serialize(self, node):
        try:
            if self.config['indent'] is None:
                text = self._dumps(node.to_plain())
            else:
                text = self._dump_node(node, level=0)
        except (TypeError, ValueError) as exc:
            raise MalformedDocumentError('cannot serialize the document as JSON '
                                         '({})'.format(ascii_str(exc))) from exc
        return text.encode('utf-8')

    def deserialize(self, data):
        try:
            obj = json.loads(data)
        except ValueError as exc:
            raise MalformedDocumentError('invalid JSON document ({})'.format(
                ascii_str(exc))) from exc
        return from_plain(obj)

    def _dumps(self, obj):
        return json.dumps(obj,
                          default=_json_default,
                          ensure_ascii=self.config['ensure_ascii'])

    def _dump_node(self, node, level):
        indent = ' ' * self.config['indent']
        inner_indent = indent * (level + 1)
        if isinstance(node, Scalar):
            return self._dumps(node.value)
        if isinstance(node, Sequence):
            if node.is_flow_style or not node.items:
                return self._dumps(node.to_plain())
            lines = [inner_indent + self._dump_node(item, level + 1)
                     for item in node.items]
        else:
            assert isinstance(node, Mapping)
            if not node.entries:
                return '{}'
            lines = [inner_indent + self._dump_key(entry.key) + ': '
                     + self._dump_node(entry.node, level + 1)
                     for entry in node.entries]
        brackets = '[]' if isinstance(node, Sequence) else '{}'
        return (brackets[0] + '\n'
                + ',\n'.join(lines) + '\n'
                + indent * level + brackets[1])

    def _dump_key(self, key):
        # (keys are converted the same way `json.dumps()` converts them)
        return self._dumps(json.loads(json.dumps({key: None}))
                           .popitem()[0])


def _json_default(obj):
    if isinstance(obj, (datetime.date, datetime.time)):
        return obj.isoformat()
    if isinstance(obj, decimal.Decimal):
        return str(obj)
    if isinstance(obj, (bytes, bytearray)):
        return obj.decode('utf-8')
    raise TypeError('{!r} is not JSON serializable'.format(type(obj)))

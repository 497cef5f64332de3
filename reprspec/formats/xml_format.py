# Copyright (c) 2026 NASK. All rights reserved.

"""
The XML format adapter (based on *lxml*).

Mapping between nodes and XML:

* a mapping entry marked as an attribute is an attribute of the
  element of its parent mapping;

* any other mapping entry is a child element (named with the entry
  key); if its node is a sequence, there is one such child element
  per item (i.e., repeated elements);

* a scalar is the text of its element (an empty element for `None`);

* the root element is named with the key of a single-entry root
  mapping, if the entry's node is tagged with that key (that is what
  the renderer makes for wrapped schemas); otherwise, the root element
  is named with the root node's tag or, if it has none, with the value
  of the `default_root_tag` config option;

* items of a root-level sequence are elements named with the value of
  the `item_tag` config option.

When deserializing, repeated child elements become sequences, and
elements without attributes and without child elements become scalars
(whose values are always strings, or `None` for empty elements; so,
declare the `type` of non-string properties).  Each node made from an
element (but not the sequence of repeated elements) is tagged with the
element's local name -- that is how the parser tells a single element
of a collection from a misshapen value, and an empty nested object from
a nil.
"""


import datetime

from lxml import etree

from reprspec.encoding_helpers import ascii_str
from reprspec.exceptions import MalformedDocumentError
from reprspec.formats.base import FormatAdapter
from reprspec.log_helpers import get_logger
from reprspec.nodes import (
    Entry,
    Mapping,
    Scalar,
    Sequence,
)


LOGGER = get_logger(__name__)


class XMLFormat(FormatAdapter):

    r"""
    >>> from reprspec.nodes import Entry, Mapping, Scalar, Sequence
    >>> node = Mapping((
    ...     Entry('album', Mapping((
    ...         Entry('id', Scalar(7), is_attribute=True),
    ...         Entry('title', Scalar('Neverland')),
    ...         Entry('songs', Mapping.from_pairs([
    ...             ('song', Sequence((Scalar('Fly'), Scalar('Crow')))),
    ...         ])),
    ...     ), tag='album')),
    ... ))
    >>> xml_format = XMLFormat(settings={})
    >>> data = xml_format.serialize(node)
    >>> print(data.decode('utf-8'))        # doctest: +NORMALIZE_WHITESPACE
    <?xml version='1.0' encoding='utf-8'?>
    <album id="7"><title>Neverland</title><songs><song>Fly</song><song>Crow</song></songs></album>
    >>> back = xml_format.deserialize(data)
    >>> back.tag
    'album'
    >>> back.lookup('id', attribute=True)
    Scalar(value='7', tag=None)
    >>> back.lookup('songs').to_plain()
    {'song': ['Fly', 'Crow']}

    >>> xml_format.deserialize(b'<album><title>')    # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    MalformedDocumentError: ...
    """

    format_name = 'xml'
    media_type = 'application/xml'
    config_section_name = 'reprspec.xml'

    def serialize(self, node):
        root_tag, content = self._get_root(node)
        try:
            root = etree.Element(root_tag)
            self._fill_element(root, content)
            return etree.tostring(root,
                                  xml_declaration=True,
                                  encoding='utf-8',
                                  pretty_print=self.config['pretty_print'])
        except ValueError as exc:
            # (e.g., keys that are not valid XML names)
            raise MalformedDocumentError('cannot serialize the document as XML '
                                         '({})'.format(ascii_str(exc))) from exc

    def deserialize(self, data):
        if isinstance(data, str):
            data = data.encode('utf-8')
        parser = etree.XMLParser(remove_blank_text=True,
                                 resolve_entities=False,
                                 no_network=True)
        try:
            root = etree.fromstring(data, parser)
        except etree.XMLSyntaxError as exc:
            raise MalformedDocumentError('invalid XML document ({})'.format(
                ascii_str(exc))) from exc
        node = self._element_to_node(root)
        if not isinstance(node, Mapping):
            # (the text of a root element without children is ignored)
            node = Mapping(tag=node.tag)
        return node

    #
    # Serialization helpers

    def _get_root(self, node):
        if isinstance(node, Mapping) and len(node.entries) == 1:
            [entry] = node.entries
            if not entry.is_attribute and entry.node.tag == entry.key:
                return entry.key, entry.node
        return (node.tag or self.config['default_root_tag']), node

    def _fill_element(self, element, node):
        if isinstance(node, Scalar):
            element.text = _as_text(node.value)
        elif isinstance(node, Sequence):
            for item in node.items:
                self._append_child(element, self.config['item_tag'], item)
        else:
            assert isinstance(node, Mapping)
            for entry in node.entries:
                if entry.is_attribute:
                    self._set_attribute(element, entry)
                elif isinstance(entry.node, Sequence):
                    for item in entry.node.items:
                        self._append_child(element, entry.key, item)
                else:
                    self._append_child(element, entry.key, entry.node)

    def _append_child(self, element, key, node):
        if isinstance(node, Sequence):
            raise MalformedDocumentError('a sequence directly inside a sequence '
                                         '(under {!r}) cannot be represented in '
                                         'XML'.format(key))
        child = etree.SubElement(element, str(key))
        self._fill_element(child, node)

    def _set_attribute(self, element, entry):
        if not isinstance(entry.node, Scalar):
            raise MalformedDocumentError('a non-scalar value (under {!r}) cannot '
                                         'be an XML attribute'.format(entry.key))
        if entry.node.value is not None:
            element.set(str(entry.key), _as_text(entry.node.value))

    #
    # Deserialization helpers

    def _element_to_node(self, element):
        tag = _local_name(element)
        children = [child for child in element if isinstance(child.tag, str)]
        if not children and not element.attrib:
            return Scalar(element.text, tag=tag)
        entries = [Entry(_local_name(name), Scalar(value), True)
                   for name, value in element.attrib.items()]
        grouped = {}
        for child in children:
            grouped.setdefault(_local_name(child), []).append(self._element_to_node(child))
        for key, nodes in grouped.items():
            node = nodes[0] if len(nodes) == 1 else Sequence(tuple(nodes))
            entries.append(Entry(key, node))
        return Mapping(tuple(entries), tag=tag)


def _local_name(element_or_name):
    return etree.QName(element_or_name).localname


def _as_text(value):
    if value is None:
        return None
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return value.decode('utf-8')
    return str(value)

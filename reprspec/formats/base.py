# Copyright (c) 2026 NASK. All rights reserved.

from reprspec.config import ConfigMixin
from reprspec.log_helpers import get_logger


LOGGER = get_logger(__name__)


class FormatAdapter(ConfigMixin):

    """
    The base class of format adapters.

    A format adapter converts generic document trees to/from the bytes
    of a concrete document format.  Concrete subclasses need to set the
    `format_name` and `config_section_name` attributes, and implement
    the `serialize()` and `deserialize()` methods.

    Constructor kwargs:
        `settings` (optional):
            The configuration settings (see: :mod:`reprspec.config`).
        Any other keyword arguments:
            Overrides of the options of the adapter's config section.
    """

    format_name = None
    media_type = None

    def __init__(self, settings=None, **config_overrides):
        self.config = dict(self.get_config_section(settings), **config_overrides)
        self._wrap_key_style = self.get_config_section(
            settings, sect_name='reprspec')['default_wrap_key_style']

    def __repr__(self):
        return '<{}>'.format(self.__class__.__qualname__)

    def serialize(self, node):
        """
        Convert the node to the document (`bytes`).

        Raises:
            :exc:`~reprspec.exceptions.MalformedDocumentError` if the
            node cannot be represented in the format.
        """
        raise NotImplementedError

    def deserialize(self, data):
        """
        Convert the document (`bytes` or `str`) to a node.

        Raises:
            :exc:`~reprspec.exceptions.MalformedDocumentError` if the
            data is not a well-formed document.
        """
        raise NotImplementedError

    def default_wrap_key(self, schema):
        """
        Get the key used for wrapping when the `wrap` option is `True`.
        """
        return schema.default_wrap_key(self._wrap_key_style)

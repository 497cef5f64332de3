# Copyright (c) 2026 NASK. All rights reserved.

from reprspec.formats.base import FormatAdapter
from reprspec.formats.json_format import JSONFormat
from reprspec.formats.xml_format import XMLFormat
from reprspec.formats.yaml_format import YAMLFormat


FORMAT_ADAPTER_CLASSES = {
    adapter_class.format_name: adapter_class
    for adapter_class in (JSONFormat, YAMLFormat, XMLFormat)}


def get_format(format, settings=None, **config_overrides):
    """
    Get a format adapter.

    Args:
        `format`:
            A format name (`'json'`, `'yaml'` or `'xml'`) or a ready
            `FormatAdapter` instance (returned intact).

    Kwargs:
        `settings` (optional) and any other keyword arguments:
            Passed to the adapter's constructor.

    >>> get_format('yaml', settings={})
    <YAMLFormat>
    >>> get_format('csv')                    # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...
    """
    if isinstance(format, FormatAdapter):
        return format
    try:
        adapter_class = FORMAT_ADAPTER_CLASSES[format]
    except KeyError:
        raise ValueError('unknown format {!r} (known formats: {})'.format(
            format, ', '.join(sorted(FORMAT_ADAPTER_CLASSES)))) from None
    return adapter_class(settings=settings, **config_overrides)

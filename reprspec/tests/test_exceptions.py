# Copyright (c) 2026 NASK. All rights reserved.

import unittest

from unittest_expander import (
    expand,
    foreach,
    param,
)

from reprspec.exceptions import (
    BindingError,
    MalformedDocumentError,
    RepresenterError,
    SchemaError,
    TypeMismatchError,
)


@expand
class TestRepresenterError(unittest.TestCase):

    @foreach(
        param(exc_class=SchemaError),
        param(exc_class=BindingError),
        param(exc_class=MalformedDocumentError),
    )
    def test_subclasses(self, exc_class):
        exc = exc_class('spam')
        self.assertIsInstance(exc, RepresenterError)
        self.assertEqual(exc.location, [])
        self.assertEqual(str(exc), 'spam')

    def test_public_message_given_explicitly(self):
        exc = SchemaError('spam', public_message='Ham.')
        self.assertEqual(str(exc), 'Ham.')
        self.assertEqual(exc.args, ('spam',))

    def test_illegal_kwargs(self):
        with self.assertRaises(TypeError):
            SchemaError('spam', colour='blue')

    def test_sublocation_nesting(self):
        with self.assertRaises(BindingError) as cm:
            with RepresenterError.sublocation('album'):
                with RepresenterError.sublocation('song'):
                    with RepresenterError.sublocation(1):
                        raise BindingError('no accessor')
        exc = cm.exception
        self.assertEqual(exc.location, ['album', 'song', 1])
        self.assertEqual(exc.location_str, 'album.song.1')
        self.assertEqual(str(exc), "no accessor (at 'album.song.1')")

    def test_sublocation_of_subclass_ignores_other_errors(self):
        with self.assertRaises(BindingError) as cm:
            with SchemaError.sublocation('forename'):
                raise BindingError('no accessor')
        self.assertEqual(cm.exception.location, [])

    def test_sublocation_ignores_non_representer_errors(self):
        with self.assertRaises(KeyError):
            with RepresenterError.sublocation('forename'):
                raise KeyError('forename')


class TestTypeMismatchError(unittest.TestCase):

    def test_default_message(self):
        exc = TypeMismatchError(raw_value='x', target_type='Integer')
        self.assertEqual(str(exc), "cannot coerce 'x' to Integer")
        self.assertEqual(exc.raw_value, 'x')
        self.assertEqual(exc.target_type, 'Integer')

    def test_custom_message_with_location(self):
        exc = TypeMismatchError('a mapping expected', raw_value=[], target_type='mapping')
        exc.location[:] = ['origin']
        self.assertEqual(str(exc), "a mapping expected (at 'origin')")

    def test_keyword_arguments_are_required(self):
        with self.assertRaises(TypeError):
            TypeMismatchError('x', int)

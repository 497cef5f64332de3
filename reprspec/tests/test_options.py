# Copyright (c) 2026 NASK. All rights reserved.

import unittest

from unittest_expander import (
    expand,
    foreach,
    param,
)

from reprspec.exceptions import SchemaError
from reprspec.options import (
    CallOptions,
    TraversalContext,
)
from reprspec.tests._helpers import PERSON_SCHEMA


@expand
class TestCallOptions(unittest.TestCase):

    def test_defaults(self):
        options = CallOptions.make()
        self.assertEqual(options, CallOptions())
        self.assertTrue(options.admits('forename'))
        self.assertIsNone(options.wrap)

    @foreach(
        param(kwargs=dict(include=['forename']), name='forename', expected=True),
        param(kwargs=dict(include=['forename']), name='surename', expected=False),
        param(kwargs=dict(exclude=['forename']), name='forename', expected=False),
        param(kwargs=dict(exclude=['forename']), name='surename', expected=True),
        param(kwargs=dict(include=['forename', 'surename'], exclude=['surename']),
              name='surename', expected=False),
        param(kwargs=dict(include='forename'), name='forename', expected=True),
        param(kwargs=dict(include=None), name='forename', expected=True),
    )
    def test_admits(self, kwargs, name, expected):
        self.assertIs(CallOptions.make(**kwargs).admits(name), expected)

    def test_kwargs_take_precedence_over_mapping(self):
        options = CallOptions.make({'wrap': True, 'exclude': ['origin']}, wrap='boy')
        self.assertEqual(options.wrap, 'boy')
        self.assertEqual(options.exclude, frozenset({'origin'}))

    def test_kwargs_take_precedence_over_instance(self):
        base = CallOptions.make(exclude=['origin'])
        options = CallOptions.make(base, wrap=False)
        self.assertIsNot(options, base)
        self.assertEqual(options.exclude, frozenset({'origin'}))
        self.assertIs(options.wrap, False)

    def test_illegal_option(self):
        with self.assertRaises(SchemaError):
            CallOptions.make({'only': ['forename']})

    def test_illegal_options_argument(self):
        with self.assertRaises(TypeError):
            CallOptions.make(['forename'])

    def test_verify_names(self):
        CallOptions.make(include=['forename'], exclude=['origin']).verify_names(PERSON_SCHEMA)
        with self.assertRaisesRegex(SchemaError, 'age'):
            CallOptions.make(exclude=['origin', 'age']).verify_names(PERSON_SCHEMA)


class TestTraversalContext(unittest.TestCase):

    def test_depth_is_tracked(self):
        ctx = TraversalContext(max_depth=3)
        with ctx.entering():
            with ctx.entering():
                self.assertEqual(ctx.depth, 2)
            self.assertEqual(ctx.depth, 1)
        self.assertEqual(ctx.depth, 0)

    def test_max_depth_exceeded(self):
        ctx = TraversalContext(max_depth=1)
        with ctx.entering():
            with self.assertRaisesRegex(SchemaError, 'depth'):
                with ctx.entering():
                    pass

    def test_cycle_detected(self):
        ctx = TraversalContext(max_depth=10)
        obj = []
        with ctx.entering(obj):
            with ctx.entering([]):
                with self.assertRaisesRegex(SchemaError, 'cycle'):
                    with ctx.entering(obj):
                        pass

    def test_same_object_at_sibling_positions_is_fine(self):
        ctx = TraversalContext(max_depth=10)
        obj = []
        with ctx.entering():
            with ctx.entering(obj):
                pass
            with ctx.entering(obj):
                pass

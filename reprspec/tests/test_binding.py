# Copyright (c) 2026 NASK. All rights reserved.

import types
import unittest
from unittest.mock import (
    MagicMock,
    sentinel,
)

from reprspec.binding import (
    Binding,
    HostView,
)
from reprspec.exceptions import BindingError
from reprspec.schema import (
    SCALAR,
    make_descriptor,
)
from reprspec.tests._helpers import (
    SlottedPerson,
    make_peter_pan,
)


def _descriptor(name='forename', **options):
    return make_descriptor(name, SCALAR, options)


class TestBinding(unittest.TestCase):

    def test_get_from_object(self):
        binding = Binding(_descriptor(), make_peter_pan())
        self.assertEqual(binding.get(), 'Peter')

    def test_get_uses_property_name_not_document_key(self):
        binding = Binding(_descriptor(from_='first_name'), make_peter_pan())
        self.assertEqual(binding.get(), 'Peter')

    def test_get_from_mapping(self):
        self.assertEqual(Binding(_descriptor(), {'forename': 'Wendy'}).get(), 'Wendy')

    def test_get_of_missing_mapping_key(self):
        self.assertIsNone(Binding(_descriptor(), {}).get())

    def test_get_of_missing_attribute(self):
        with self.assertRaises(BindingError):
            Binding(_descriptor(), SlottedPerson()).get()

    def test_set_on_object(self):
        person = make_peter_pan()
        Binding(_descriptor(), person).set('Captain')
        self.assertEqual(person.forename, 'Captain')

    def test_set_on_mapping(self):
        host = {}
        Binding(_descriptor(), host).set(sentinel.value)
        self.assertEqual(host, {'forename': sentinel.value})

    def test_set_on_read_only_mapping(self):
        with self.assertRaises(BindingError):
            Binding(_descriptor(), types.MappingProxyType({})).set('Captain')

    def test_set_of_undeclared_slot(self):
        with self.assertRaises(BindingError):
            Binding(_descriptor('surename'), SlottedPerson()).set('Hook')

    def test_set_of_declared_slot(self):
        host = SlottedPerson()
        Binding(_descriptor(), host).set('Smee')
        self.assertEqual(host.forename, 'Smee')

    def test_condition_holds_without_condition(self):
        self.assertTrue(Binding(_descriptor(), make_peter_pan()).condition_holds())

    def test_condition_is_given_read_only_view(self):
        condition = MagicMock(return_value=0)
        person = make_peter_pan()
        binding = Binding(_descriptor(if_=condition), person)
        self.assertIs(binding.condition_holds(), False)
        condition.assert_called_once()
        [view], _ = condition.call_args
        self.assertIsInstance(view, HostView)
        self.assertEqual(view.surename, 'Pan')
        with self.assertRaises(AttributeError):
            view.surename = 'Hook'
        self.assertEqual(person.surename, 'Pan')


class TestHostView(unittest.TestCase):

    def test_object_host(self):
        view = HostView(make_peter_pan())
        self.assertEqual(view.forename, 'Peter')
        self.assertEqual(view['surename'], 'Pan')
        self.assertEqual(view.origin.title, 'Neverland')
        self.assertEqual(view.get('age', 12), 12)
        with self.assertRaises(KeyError):
            view['age']

    def test_mapping_host(self):
        view = HostView({'forename': 'Wendy'})
        self.assertEqual(view.forename, 'Wendy')
        self.assertIsNone(view.get('surename'))
        with self.assertRaises(AttributeError):
            view.surename

    def test_cannot_delete(self):
        view = HostView(make_peter_pan())
        with self.assertRaises(AttributeError):
            del view.forename

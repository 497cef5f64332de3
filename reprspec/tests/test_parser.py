# Copyright (c) 2026 NASK. All rights reserved.

import datetime
import types
import unittest

from unittest_expander import (
    expand,
    foreach,
    param,
)

from reprspec.coercion import CoercionAdapter
from reprspec.exceptions import (
    BindingError,
    MalformedDocumentError,
    SchemaError,
    TypeMismatchError,
)
from reprspec.nodes import (
    Entry,
    Mapping,
    Scalar,
    Sequence,
    from_plain,
)
from reprspec.parser import Parser
from reprspec.schema import SchemaBuilder
from reprspec.tests._generic_helpers import TestCaseMixin
from reprspec.tests._helpers import (
    ALBUM_SCHEMA,
    LOCATION_SCHEMA,
    PERSON_SCHEMA,
    REGISTRY,
    Album,
    Location,
    Person,
    Song,
    make_album,
    make_peter_pan,
)


@expand
class TestParser(TestCaseMixin, unittest.TestCase):

    def setUp(self):
        self.parser = Parser(registry=REGISTRY, settings={})

    def test_into_new_object(self):
        person = self.parser.parse(
            from_plain({'forename': 'Captain', 'surename': 'Hook'}),
            PERSON_SCHEMA,
            Person)
        self.assertEqual(person, Person(forename='Captain', surename='Hook'))

    def test_default_object_factory_is_dict(self):
        result = self.parser.parse(
            from_plain({'forename': 'Captain', 'origin': {'title': 'Jolly Roger'}}),
            PERSON_SCHEMA)
        self.assertEqual(result, {'forename': 'Captain',
                                  'origin': Location(title='Jolly Roger')})

    def test_undeclared_keys_are_ignored(self):
        person = self.parser.parse(
            from_plain({'forename': 'Captain', 'hand': 'hook'}),
            PERSON_SCHEMA,
            Person)
        self.assertFalse(hasattr(person, 'hand'))

    def test_absent_key_leaves_property_untouched(self):
        person = Person(forename='Peter', surename='Pan')
        result = self.parser.parse_into(from_plain({'forename': 'Captain'}), PERSON_SCHEMA, person)
        self.assertIs(result, person)
        self.assertEqual(person, Person(forename='Captain', surename='Pan'))

    def test_explicit_null_sets_none(self):
        person = Person(forename='Peter', surename='Pan')
        self.parser.parse_into(from_plain({'surename': None}), PERSON_SCHEMA, person)
        self.assertEqual(person, Person(forename='Peter', surename=None))

    def test_explicit_null_under_nested_object_sets_none(self):
        person = make_peter_pan()
        self.parser.parse_into(from_plain({'origin': None}), PERSON_SCHEMA, person)
        self.assertIsNone(person.origin)

    def test_empty_element_under_nested_object(self):
        node = Mapping.from_pairs([
            ('forename', Scalar('Peter', tag='forename')),
            ('surename', Scalar(None, tag='surename')),
            ('origin', Scalar(None, tag='origin')),
        ], tag='person')
        self.assertEqual(self.parser.parse(node, PERSON_SCHEMA, Person),
                         Person(forename='Peter', origin=Location()))

    @foreach(
        param(value=False),
        param(value=0),
        param(value=''),
    )
    def test_falsy_values_are_set(self, value):
        schema = SchemaBuilder().declare_property('flag').build()
        result = self.parser.parse(from_plain({'flag': value}), schema)
        self.assertEqualIncludingTypes(result, {'flag': value})

    def test_document_key(self):
        schema = SchemaBuilder().declare_property('forename', from_='first_name').build()
        result = self.parser.parse(from_plain({'first_name': 'Wendy', 'forename': 'X'}), schema)
        self.assertEqual(result, {'forename': 'Wendy'})

    def test_attribute_placement_is_preferred(self):
        schema = SchemaBuilder().declare_property('id', attribute=True).build()
        node = Mapping((Entry('id', Scalar('child')), Entry('id', Scalar('attr'), True)))
        self.assertEqual(self.parser.parse(node, schema), {'id': 'attr'})

    @foreach(
        param(plain={}, expected={'age': 12, 'nicknames': [1, 2], 'scores': {'x': 3}})
        .label('absent'),
        param(plain={'age': None, 'nicknames': None, 'scores': None},
              expected={'age': None, 'nicknames': None, 'scores': None})
        .label('explicit null'),
        param(plain={'age': '7'}, expected={'age': 7, 'nicknames': [1, 2], 'scores': {'x': 3}})
        .label('present'),
    )
    def test_defaults(self, plain, expected):
        schema = (SchemaBuilder()
                  .declare_property('age', type=int, default='12')
                  .declare_collection('nicknames', type='Integer', default=['1', 2])
                  .declare_hash('scores', type=int, default={'x': '3'})
                  .build())
        self.assertEqualIncludingTypes(self.parser.parse(from_plain(plain), schema), expected)

    def test_default_without_type(self):
        schema = SchemaBuilder().declare_property('colour', default='green').build()
        self.assertEqual(self.parser.parse(Mapping(), schema), {'colour': 'green'})

    def test_invalid_default(self):
        schema = SchemaBuilder().declare_property('age', type=int, default='twelve').build()
        with self.assertRaisesAt(TypeMismatchError, ['age']):
            self.parser.parse(Mapping(), schema)

    def test_coercion_of_collection_elements(self):
        schema = SchemaBuilder().declare_collection('tracks', type=int).build()
        result = self.parser.parse(from_plain({'tracks': ['1', 2, None]}), schema)
        self.assertEqualIncludingTypes(result, {'tracks': [1, 2, None]})

    def test_single_element_of_collection(self):
        schema = SchemaBuilder().declare_collection('song', class_=Song, wrap='songs').build()
        node = Mapping.from_pairs([
            ('songs', Mapping.from_pairs([
                ('song', Mapping.from_pairs([('title', Scalar('Fly'))], tag='song')),
            ])),
        ])
        self.assertEqual(self.parser.parse(node, schema), {'song': [Song(title='Fly')]})

    def test_single_scalar_element_of_collection(self):
        schema = SchemaBuilder().declare_collection('composers').build()
        node = Mapping.from_pairs([('composers', Scalar('Hook', tag='composers'))])
        self.assertEqual(self.parser.parse(node, schema), {'composers': ['Hook']})

    @foreach(
        param(container=Scalar(None)).label('empty container'),
        param(container=Mapping()).label('container without elements'),
    )
    def test_empty_wrapped_collection(self, container):
        schema = SchemaBuilder().declare_collection('song', class_=Song, wrap='songs').build()
        node = Mapping.from_pairs([('songs', container)])
        self.assertEqual(self.parser.parse(node, schema), {'song': []})

    def test_absent_wrapped_collection(self):
        schema = SchemaBuilder().declare_collection('song', class_=Song, wrap='songs').build()
        self.assertEqual(self.parser.parse(Mapping(), schema), {})

    def test_album(self):
        plain = {
            'album': {
                'id': '7',
                'title': 'Neverland Tunes',
                'released': '2013-06-12',
                'songs': {'song': [
                    {'title': 'Fly', 'track': '1', 'composers': ['Hook', 'Smee']},
                    {'title': 'Crow', 'track': 2, 'composers': ['Pan']},
                ]},
                'ratings': {'critics': '4', 'fans': 5},
                'producer': {
                    'forename': 'Peter',
                    'surename': 'Pan',
                    'origin': {'title': 'Neverland'},
                },
            },
        }
        album = self.parser.parse(from_plain(plain), ALBUM_SCHEMA, Album)
        self.assertEqual(album, make_album())
        self.assertIs(type(album.released), datetime.date)

    def test_condition_sees_populated_host(self):
        schema = (SchemaBuilder()
                  .declare_property('forename')
                  .declare_property('origin', class_=Location,
                                    if_=lambda host: host.forename != 'Captain')
                  .build())
        plain = {'forename': 'Captain', 'origin': {'title': 'Jolly Roger'}}
        self.assertEqual(self.parser.parse(from_plain(plain), schema, Person),
                         Person(forename='Captain'))
        plain['forename'] = 'Peter'
        self.assertEqual(self.parser.parse(from_plain(plain), schema, Person),
                         Person(forename='Peter', origin=Location(title='Jolly Roger')))

    @foreach(
        param(kwargs=dict(include=['forename']), expected={'forename': 'Captain'}),
        param(kwargs=dict(exclude=['forename']), expected={'surename': 'Hook'}),
    )
    def test_include_exclude(self, kwargs, expected):
        result = self.parser.parse(from_plain({'forename': 'Captain', 'surename': 'Hook'}),
                                   PERSON_SCHEMA, **kwargs)
        self.assertEqual(result, expected)

    #
    # Wrapping

    def test_wrapped_schema(self):
        schema = SchemaBuilder('Location', wrap=True).declare_property('title').build()
        result = self.parser.parse(from_plain({'location': {'title': 'Neverland'}}), schema)
        self.assertEqual(result, {'title': 'Neverland'})

    def test_wrapper_given_as_tagged_root(self):
        schema = SchemaBuilder('Location', wrap=True).declare_property('title').build()
        node = Mapping.from_pairs([('title', Scalar('Neverland'))], tag='location')
        self.assertEqual(self.parser.parse(node, schema), {'title': 'Neverland'})

    def test_call_time_wrap(self):
        result = self.parser.parse(from_plain({'boy': {'forename': 'Peter'}}),
                                   PERSON_SCHEMA, wrap='boy')
        self.assertEqual(result, {'forename': 'Peter'})

    @foreach(
        param(plain={'title': 'Neverland'}),
        param(plain={'place': {'title': 'Neverland'}}),
        param(plain=['location']),
    )
    def test_missing_wrapper(self, plain):
        schema = SchemaBuilder('Location', wrap=True).declare_property('title').build()
        with self.assertRaises(MalformedDocumentError):
            self.parser.parse(from_plain(plain), schema)

    #
    # Top-level collections and hashes

    def test_top_level_collection(self):
        schema = SchemaBuilder.collection_of('Locations', class_=Location)
        result = self.parser.parse(from_plain([{'title': 'Neverland'}, None]), schema)
        self.assertEqual(result, [Location(title='Neverland'), None])

    def test_top_level_collection_with_factory(self):
        schema = SchemaBuilder.collection_of('Locations', wrap=True)
        result = self.parser.parse(from_plain({'locations': ['Neverland', 'London']}),
                                   schema, tuple)
        self.assertEqual(result, ('Neverland', 'London'))

    def test_top_level_collection_from_mapping_of_repeated_elements(self):
        schema = SchemaBuilder.collection_of('Locations', class_=Location)
        node = Mapping((
            Entry('count', Scalar('2'), True),
            Entry('item', Sequence((
                Mapping.from_pairs([('title', Scalar('Neverland'))]),
                Mapping.from_pairs([('title', Scalar('London'))]),
            ))),
        ), tag='document')
        self.assertEqual(self.parser.parse(node, schema),
                         [Location(title='Neverland'), Location(title='London')])

    def test_top_level_hash(self):
        schema = SchemaBuilder.hash_of('Places', extend=LOCATION_SCHEMA, class_=Location)
        result = self.parser.parse(from_plain({'home': {'title': 'Neverland'}}), schema)
        self.assertEqual(result, {'home': Location(title='Neverland')})

    def test_parse_into_with_collection_schema(self):
        schema = SchemaBuilder.collection_of('Locations')
        with self.assertRaises(SchemaError):
            self.parser.parse_into(Sequence(), schema, [])

    def test_tag_of_custom_coercion_adapter(self):
        coercion = CoercionAdapter()
        coercion.register('Upper', lambda value: value.upper())
        schema = SchemaBuilder().declare_property('name', type='Upper').build()
        parser = Parser(coercion=coercion, settings={})
        self.assertEqual(parser.parse(from_plain({'name': 'hook'}), schema), {'name': 'HOOK'})

    #
    # Failures

    def test_tag_unknown_to_coercion_adapter(self):
        schema = SchemaBuilder().declare_property('name', type='Upper').build()
        with self.assertRaisesAt(SchemaError, ['name']):
            self.parser.parse(from_plain({'name': 'hook'}), schema)

    def test_type_mismatch_location(self):
        plain = {'songs': {'song': [{'title': 'Fly', 'track': 'one'}]}}
        with self.assertRaisesAt(TypeMismatchError, ['song', 0, 'track']) as cm:
            self.parser.parse(from_plain(plain), ALBUM_SCHEMA, Album, wrap=False)
        self.assertEqual(cm.exception.raw_value, 'one')
        self.assertIs(cm.exception.target_type, int)

    def test_non_mapping_for_nested_object(self):
        with self.assertRaisesAt(TypeMismatchError, ['origin']):
            self.parser.parse(from_plain({'origin': 'Neverland'}), PERSON_SCHEMA)

    @foreach(
        param(plain={'composers': {'a': 1}}).label('mapping'),
        param(plain={'composers': 'Hook'}).label('scalar'),
    )
    def test_non_sequence_for_collection(self, plain):
        schema = SchemaBuilder().declare_collection('composers').build()
        with self.assertRaisesAt(TypeMismatchError, ['composers']) as cm:
            self.parser.parse(from_plain(plain), schema)
        self.assertEqual(cm.exception.target_type, 'sequence')

    def test_non_mapping_for_hash(self):
        schema = SchemaBuilder().declare_hash('ratings').build()
        with self.assertRaisesAt(TypeMismatchError, ['ratings']):
            self.parser.parse(from_plain({'ratings': [1, 2]}), schema)

    def test_extend_without_class(self):
        schema = SchemaBuilder().declare_property('origin', extend=LOCATION_SCHEMA).build()
        with self.assertRaisesAt(SchemaError, ['origin']):
            self.parser.parse(from_plain({'origin': {'title': 'Neverland'}}), schema)

    def test_read_only_target(self):
        with self.assertRaisesAt(BindingError, ['forename']):
            self.parser.parse_into(from_plain({'forename': 'Captain'}), PERSON_SCHEMA,
                                   types.MappingProxyType({}))

    def test_partial_mutation_is_not_rolled_back(self):
        person = Person()
        with self.assertRaises(TypeMismatchError):
            self.parser.parse_into(from_plain({'forename': 'Captain', 'origin': 'Ship'}),
                                   PERSON_SCHEMA, person)
        self.assertEqual(person.forename, 'Captain')

    def test_max_depth(self):
        schema = (SchemaBuilder('Person')
                  .declare_property('forename')
                  .declare_property('origin', class_=Location)
                  .build())
        parser = Parser(registry=REGISTRY, settings={'reprspec.max_depth': '1'})
        with self.assertRaisesAt(SchemaError, ['origin']):
            parser.parse(from_plain({'origin': {'title': 'Neverland'}}), schema)

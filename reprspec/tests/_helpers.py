# Copyright (c) 2026 NASK. All rights reserved.

import datetime

from reprspec.schema import (
    SchemaBuilder,
    SchemaRegistry,
)


#
# Domain classes used in tests

class _Record(object):

    _field_names = ()

    def __init__(self, **kwargs):
        for name in self._field_names:
            setattr(self, name, kwargs.pop(name, None))
        if kwargs:
            raise TypeError('unexpected kwargs: {!r}'.format(sorted(kwargs)))

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__,
            ', '.join('{}={!r}'.format(name, getattr(self, name))
                      for name in self._field_names))


class Location(_Record):
    _field_names = ('title',)


class Person(_Record):
    _field_names = ('forename', 'surename', 'origin')


class Song(_Record):
    _field_names = ('title', 'track', 'composers', 'lyrics')


class Album(_Record):
    _field_names = ('id', 'title', 'released', 'songs', 'ratings', 'producer')


class SlottedPerson(object):
    __slots__ = ('forename',)


#
# Schemas

REGISTRY = SchemaRegistry()

LOCATION_SCHEMA = SchemaBuilder('Location').declare_property('title').build()
REGISTRY.register(Location, LOCATION_SCHEMA)

PERSON_SCHEMA = (SchemaBuilder('Person')
                 .declare_property('forename')
                 .declare_property('surename')
                 .declare_property('origin', class_=Location)
                 .build())

SONG_SCHEMA = (SchemaBuilder('Song')
               .declare_property('title')
               .declare_property('track', type=int)
               .declare_collection('composers', style='flow')
               .build())
REGISTRY.register(Song, SONG_SCHEMA)

ALBUM_SCHEMA = (SchemaBuilder('Album', wrap=True)
                .declare_property('id', attribute=True, type=int)
                .declare_property('title')
                .declare_property('released', type='Date')
                .declare_collection('songs', class_=Song, wrap='songs', from_='song')
                .declare_hash('ratings', type=int)
                .declare_property('producer', class_=Person, extend=PERSON_SCHEMA)
                .build())


def make_peter_pan():
    return Person(forename='Peter',
                  surename='Pan',
                  origin=Location(title='Neverland'))


def make_album():
    return Album(
        id=7,
        title='Neverland Tunes',
        released=datetime.date(2013, 6, 12),
        songs=[
            Song(title='Fly', track=1, composers=['Hook', 'Smee']),
            Song(title='Crow', track=2, composers=['Pan']),
        ],
        ratings={'critics': 4, 'fans': 5},
        producer=make_peter_pan())

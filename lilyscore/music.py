# -*- coding: utf-8 -*-
#
# This file is part of `lilyscore`, a library to write LilyPond `.ly` documents
#
# Copyright © 2020-2026 by the lilyscore authors
#
# This module is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This module is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.


"""
The music model: events, measures, voices and the score.

The model is a strict tree: a :class:`Score` contains :class:`Voice`
objects, a Voice contains :class:`Measure` objects, and a Measure contains
events (:class:`Note`, :class:`Rest`, :class:`Skip` and :class:`Chord`).
Score, Voice and Measure are lists, so all list methods can be used to build
and modify the tree. An example::

    >>> from lilyscore.music import *
    >>> from lilyscore.pitch import Pitch
    >>> from lilyscore.duration import Duration
    >>> m = Measure([Note(Pitch.from_name('C', 4)), Rest(Duration(8))])
    >>> s = Score([Voice([m], name="melody")], title="Example")
    >>> s
    <Score (1 voice) title='Example'>

Instantiating never validates; the writer checks all values before writing
anything.

"""

from .duration import Duration
from .markup import markup as _markup


#: Values for the ``direction`` of attached markup.
UP, DOWN = 1, -1


class Event:
    """Base class for everything that takes time in a measure.

    Every event has a :class:`~.duration.Duration`, a crotchet by default.

    """
    def __init__(self, duration=None):
        self.duration = Duration() if duration is None else duration

    def __repr__(self):
        return "<{} {}>".format(type(self).__name__, self._repr_content())

    def _repr_content(self):
        return self.duration.to_string()

    def _as_tuple(self):
        return (self.duration,)

    def __eq__(self, other):
        if type(self) is type(other):
            return self._as_tuple() == other._as_tuple()
        return NotImplemented

    def __hash__(self):
        return hash((type(self), self._as_tuple()))

    def pitches(self):
        """Return the list of pitches of this event (empty for rests)."""
        return []


class Rest(Event):
    """A rest, written as ``r``."""


class Skip(Event):
    """An invisible rest, written as ``s``."""


class _Pitched(Event):
    """Base class for a note or chord.

    ``tie`` ties the event to the next one. ``markup`` is text (a string or a
    :class:`~.markup.Markup`) attached above (``direction`` ``UP``, the
    default) or below (``DOWN``) the event.

    """
    def __init__(self, duration=None, tie=False, markup=None, direction=UP):
        super().__init__(duration)
        self.tie = tie
        self.markup = None if markup is None else _markup(markup)
        self.direction = direction

    def _as_tuple(self):
        return (self.duration, self.tie, self.markup, self.direction)


class Note(_Pitched):
    """A note with a :class:`~.pitch.Pitch`."""
    def __init__(self, pitch, duration=None, tie=False, markup=None, direction=UP):
        super().__init__(duration, tie, markup, direction)
        self.pitch = pitch

    def _repr_content(self):
        return "{}{}".format(self.pitch, self.duration.to_string())

    def _as_tuple(self):
        return (self.pitch,) + super()._as_tuple()

    def pitches(self):
        return [self.pitch]


class Chord(_Pitched):
    """Notes sounding together, written as ``<c e g>``.

    A chord needs at least one pitch.

    """
    def __init__(self, pitches, duration=None, tie=False, markup=None, direction=UP):
        super().__init__(duration, tie, markup, direction)
        self._pitches = list(pitches)

    def _repr_content(self):
        return "<{}>{}".format(" ".join(map(format, self._pitches)), self.duration.to_string())

    def _as_tuple(self):
        return (tuple(self._pitches),) + super()._as_tuple()

    def pitches(self):
        return self._pitches


class _Container(list):
    """Base class for the list-like nodes of the tree."""
    _child_name = "child"

    def _repr_extra(self):
        return ""

    def __repr__(self):
        count = len(self)
        return "<{} ({} {}{}){}>".format(type(self).__name__, count,
            self._child_name, "" if count == 1 else "s", self._repr_extra())

    def _attributes(self):
        return ()

    def __eq__(self, other):
        if type(self) is type(other):
            return list.__eq__(self, other) and self._attributes() == other._attributes()
        return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def length(self):
        """Return the musical length, see :func:`.time.length`."""
        from .time import length
        return length(self)


class Measure(_Container):
    """A list of events."""
    _child_name = "event"


class Voice(_Container):
    """A list of measures: an independent musical line.

    The ``name``, if given, is used as the name of the LilyPond Voice
    context. The ``clef`` is a LilyPond clef name (like ``"treble"`` or
    ``"bass_8"``), the ``key`` a :class:`~.key.KeySignature` and ``time`` a
    :class:`~.time.TimeSignature`. They are all optional and written at the
    start of the voice.

    """
    _child_name = "measure"

    def __init__(self, measures=(), name=None, clef=None, key=None, time=None):
        super().__init__(measures)
        self.name = name
        self.clef = clef
        self.key = key
        self.time = time

    def _repr_extra(self):
        return " {!r}".format(self.name) if self.name else ""

    def _attributes(self):
        return (self.name, self.clef, self.key, self.time)

    def events(self):
        """Yield all events of all measures, in order."""
        for measure in self:
            yield from measure


class Score(_Container):
    """A list of voices, with header metadata.

    The ``header`` is a dictionary with free-form fields like ``title`` and
    ``composer``; keyword arguments are added to it. The fields are written
    in insertion order.

    """
    _child_name = "voice"

    def __init__(self, voices=(), header=None, **fields):
        super().__init__(voices)
        self.header = dict(header or {})
        self.header.update(fields)

    def _repr_extra(self):
        return "".join(" {}={!r}".format(k, v) for k, v in self.header.items())

    def _attributes(self):
        return (self.header,)


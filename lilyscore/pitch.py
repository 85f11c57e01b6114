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
Classes and functions to deal with LilyPond pitches.

A pitch consists of a step (note, the index in the global default scale) and an
alteration, which is a rational value (fraction or floating point) in whole
tones. The notes 0..6 correspond with the usual "white keys" C, D, E, F, G, A,
B; a sharp is represented by a +0.5 alteration value, and a flat by a -0.5
value.

The octave of a pitch is 0 for the octave starting at middle C, just like
LilyPond handles the octave. In scientific pitch notation that octave is
number 4, so C4 is ``Pitch(0, 0, 0)``, written as ``c'`` in LilyPond.

The pitch names of all languages LilyPond supports are read from
:mod:`parce.lang.lilypond_words`.

"""

import bisect
import collections
import numbers

import parce.util
from parce.lang.lilypond_words import pitch_names

from .errors import InvalidPitch


#: Major scale: C D E F G A B, with the default pitch offset from the starting
#: C in whole tones.
MAJOR_SCALE = (0, 1, 2, 2.5, 3.5, 4.5, 5.5)

#: Which pitch values get a flat by default instead of a sharp when converting
#: a MIDI key number to a pitch.
MAJOR_FLATS = (1.5, 5)

#: The note letters, in the order of the note values 0..6.
NOTE_NAMES = "CDEFGAB"

#: Accidental names and their alteration in whole tones.
ACCIDENTALS = {
    'doubleflat': -1,
    'flat': -0.5,
    'natural': 0,
    'sharp': 0.5,
    'doublesharp': 1,
}

#: The scientific octave number of our octave 0 (the octave of middle C).
SCIENTIFIC_OFFSET = 4


# reverse pitch names
def _make_reverse_pitch_table():
    for language, pitches in pitch_names.items():
        notes = collections.defaultdict(lambda: collections.defaultdict(list))
        for name, (octave, note, alter) in pitches.items():
            notes[note, alter][octave].append(name)
        yield language, {note_alter:
            {octave: tuple(names) for octave, names in d.items()}
                for note_alter, d in notes.items()}

pitch_names_reversed = dict(_make_reverse_pitch_table())
del _make_reverse_pitch_table


class Pitch:
    """A pitch with ``octave``, ``note``, and ``alter`` attributes.

    The attributes have the same contents and meaning as the three values in
    LilyPond's ``(ly:make-pitch octave note alter)`` construct.

    The ``octave`` is an integer where 0 stands for the octave containing
    "middle C" (with one apostrophe in LilyPond's format). The ``note`` is an
    integer in the 0..6 range, where 0 stands for C; the ``alter`` is an
    integer, float or fraction denoting the alteration in whole tones.

    Pitches compare equal when their attributes are the same, and also support
    the ``>``, ``<``, ``>=`` and ``<=`` operators. These operators compare on
    octave first, then note, then alter.

    ``format(pitch)`` returns the dutch notation (or a question mark if
    there's no known name for the note, alter combination).

    """
    def __init__(self, octave, note, alter=0):
        self.octave = octave
        self.note = note
        self.alter = alter

    @classmethod
    def from_name(cls, name, octave=SCIENTIFIC_OFFSET, accidental=None):
        """Return a Pitch from a note letter and a scientific octave number.

        The ``name`` is a letter A..G (case does not matter), the ``octave``
        the octave number in scientific pitch notation (4 for the octave
        starting at middle C) and the ``accidental`` one of the names in
        :py:data:`ACCIDENTALS` or a numeric alteration. For example::

            >>> Pitch.from_name('F', 4, 'sharp')
            <Pitch octave=0, note=3, alter=0.5 (fis')>

        Raises :class:`~.errors.InvalidPitch` for an unknown name or
        accidental.

        """
        try:
            note = NOTE_NAMES.index(name.upper())
        except (AttributeError, ValueError):
            raise InvalidPitch("invalid note name: {!r}".format(name)) from None
        if len(name) != 1:
            raise InvalidPitch("invalid note name: {!r}".format(name))
        if accidental is None:
            alter = 0
        elif isinstance(accidental, str):
            try:
                alter = ACCIDENTALS[accidental.lower()]
            except KeyError:
                raise InvalidPitch("unknown accidental: {!r}".format(accidental)) from None
        else:
            alter = accidental
        return cls(octave - SCIENTIFIC_OFFSET, note, alter)

    def __format__(self, format_spec):
        p = PitchProcessor()
        try:
            s = p.to_string(self)
        except (KeyError, TypeError):
            s = '?'
        return format(s, format_spec)

    def __repr__(self):
        return "<{} octave={}, note={}, alter={} ({})>".format(
            self.__class__.__name__, self.octave, self.note, self.alter, self)

    def _as_tuple(self):
        """Return our attributes as a sortable tuple."""
        return (self.octave, self.note, self.alter)

    def __eq__(self, other):
        return isinstance(other, Pitch) and self._as_tuple() == other._as_tuple()

    def __ne__(self, other):
        return not isinstance(other, Pitch) or self._as_tuple() != other._as_tuple()

    def __hash__(self):
        return hash(self._as_tuple())

    def __gt__(self, other):
        if isinstance(other, Pitch):
            return self._as_tuple() > other._as_tuple()
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, Pitch):
            return self._as_tuple() < other._as_tuple()
        return NotImplemented

    def __ge__(self, other):
        if isinstance(other, Pitch):
            return self._as_tuple() >= other._as_tuple()
        return NotImplemented

    def __le__(self, other):
        if isinstance(other, Pitch):
            return self._as_tuple() <= other._as_tuple()
        return NotImplemented

    def copy(self):
        """Return a new Pitch with our attributes."""
        return type(self)(self.octave, self.note, self.alter)

    @property
    def scientific_octave(self):
        """The octave number in scientific pitch notation (middle C is C4)."""
        return self.octave + SCIENTIFIC_OFFSET

    @property
    def name(self):
        """The note letter, e.g. ``'C'``."""
        return NOTE_NAMES[self.note]

    def validate(self, min_octave=None, max_octave=None):
        """Raise :class:`~.errors.InvalidPitch` if this pitch is out of range.

        Checks that the note is in 0..6, the alteration is a number between
        -1 and 1, and, if given, that the scientific octave is in the range
        ``min_octave`` .. ``max_octave``. Whether a pitch name exists for the
        alteration depends on the language and is checked when writing.

        """
        if isinstance(self.note, bool) or not isinstance(self.note, int) \
                or not 0 <= self.note < len(NOTE_NAMES):
            raise InvalidPitch("invalid note: {!r}".format(self.note))
        if isinstance(self.alter, bool) or not isinstance(self.alter, numbers.Real) \
                or not -1 <= self.alter <= 1:
            raise InvalidPitch("invalid alteration: {!r}".format(self.alter))
        if isinstance(self.octave, bool) or not isinstance(self.octave, int):
            raise InvalidPitch("invalid octave: {!r}".format(self.octave))
        octave = self.scientific_octave
        if (min_octave is not None and octave < min_octave) or \
                (max_octave is not None and octave > max_octave):
            raise InvalidPitch("octave {} of {} out of range {}..{}".format(
                octave, self.name, min_octave, max_octave))

    def to_midi(self, scale=None):
        """Return the MIDI key number for this pitch."""
        scale = scale or MAJOR_SCALE
        return int((self.octave + 5) * 12 + (scale[self.note] + self.alter) * 2)

    @classmethod
    def from_midi(cls, key, scale=None, flats=None):
        """Return a :class:`Pitch` from the MIDI key value.

        All altered notes get a sharp, unless a pitch value is listed in the
        ``flats`` parameter. By default, the pitch values 1.5 and 5 get a flat,
        resulting in an e-flat instead of d-sharp and a b-flat instead of an
        a-sharp. For example::

            >>> Pitch.from_midi(60)
            <Pitch octave=0, note=0, alter=0 (c')>
            >>> Pitch.from_midi(70)
            <Pitch octave=0, note=6, alter=-0.5 (bes')>

        """
        scale = scale or MAJOR_SCALE
        flats = MAJOR_FLATS if flats is None else flats
        octave, step = divmod(key, 12)
        pitch = step / 2
        if pitch in flats:
            note = bisect.bisect_left(scale, pitch)
        else:
            note = bisect.bisect_right(scale, pitch) - 1
        alter = pitch - scale[note]
        a = int(alter)
        if a == alter:
            alter = a
        return cls(octave - 5, note, alter)

    def make_absolute(self, prev_pitch, scale=None):
        """Make ourselves absolute, i.e. set our octave from ``prev_pitch``."""
        l = len(scale or MAJOR_SCALE)
        self.octave += prev_pitch.octave - (self.note - prev_pitch.note + 3) // l

    def make_relative(self, prev_pitch, scale=None):
        """Make ourselves relative, i.e. change our octave from ``prev_pitch``."""
        l = len(scale or MAJOR_SCALE)
        self.octave -= prev_pitch.octave - (self.note - prev_pitch.note + 3) // l


class PitchProcessor:
    """Read and write pitch names in all LilyPond languages.

    The language to use by default can be given on instantiation or set in the
    ``language`` attribute. Some languages have multiple pitch names for the
    same note; using the ``prefer_`` attributes you can control which style is
    chosen when writing the pitch name.

    """
    #: Prefer long names in english, e.g. ``c-sharpsharp`` above ``css``
    prefer_long = False

    #: Prefer ``ré`` above ``re`` (in francais)
    prefer_accented = False

    #: Prefer ``dox`` above ``doss``, ``cx`` above ``css``, etc in espanol, english, francais
    prefer_x = False

    #: Prefer ``es`` above ``ees`` and ``as`` above ``aes`` (in nederlands)
    prefer_classic = True

    _language = "nederlands"

    def __init__(self, language=None):
        if language:
            self.language = language

    def __repr__(self):
        return "<{} ({})>".format(type(self).__name__, self._language)

    @property
    def language(self):
        """The language to use (default: ``"nederlands"``).

        Deleting this attribute sets it back to ``"nederlands"``. Raises a
        :obj:`KeyError` if the language you try to set does not exist.

        """
        return self._language

    @language.setter
    def language(self, language):
        if language not in pitch_names:
            raise KeyError("unknown language name")
        self._language = language

    @language.deleter
    def language(self):
        self._language = "nederlands"

    def pitch(self, name):
        """Return a :class:`Pitch` for the specified note name.

        The name may be followed by octave marks. Raises a :obj:`KeyError` if
        the language does not know the pitch name. For example::

            >>> p = PitchProcessor()
            >>> p.pitch('cis')
            <Pitch octave=-1, note=0, alter=0.5 (cis)>
            >>> p.pitch("bes'")
            <Pitch octave=0, note=6, alter=-0.5 (bes')>

        """
        stripped = name.rstrip("',")
        p = Pitch(*pitch_names[self._language][stripped])
        p.octave += octave_from_string(name[len(stripped):])
        return p

    def name_octave(self, pitch):
        """Return a two-tuple (name, octave) for the :class:`Pitch`.

        The name is the note name, the octave is the number of ``,`` (if
        negative) or ``'`` that still need to be added.

        Raises a :obj:`KeyError` if the language does not contain a pitch name.

        """
        octave_dict = pitch_names_reversed[self._language][pitch.note, pitch.alter]
        for octave in sorted(octave_dict, key=lambda o: abs(o - pitch.octave)):
            names = octave_dict[octave]
            octave = pitch.octave - octave
            if len(names) == 1:
                name = names[0]
            else:
                name = self._suitable(self._language, names) or names[-1]
            return name, octave

    def to_string(self, pitch):
        """Return a string representing the pitch.

        Raises a :obj:`KeyError` if the language does not contain a pitch name.

        For example::

            >>> p = PitchProcessor()
            >>> p.to_string(Pitch(-1, 0, 0))
            'c'
            >>> p.to_string(Pitch(0, 4, 1))
            "gisis'"
            >>> p.language = 'english'
            >>> p.to_string(Pitch(0, 4, 1))
            "gss'"

        """
        name, octave = self.name_octave(pitch)
        return name + octave_to_string(octave)

    def relative_string(self, pitch, prev_pitch):
        """Return the string for the pitch in relative notation.

        The octave marks are computed from the ``prev_pitch``, just like
        LilyPond does inside ``\\relative``: a pitch without octave marks is
        the one closest to the previous pitch. The ``pitch`` is not altered.

        """
        p = pitch.copy()
        default_octave = p.octave - self.name_octave(p)[1]
        p.make_relative(prev_pitch)
        p.octave += default_octave
        return self.to_string(p)

    _suitable = parce.util.Dispatcher()

    @_suitable("nederlands")
    def _nederlands(self, names):
        for name in names:
            if self.prefer_classic == (name in {'es', 'eses', 'as', 'ases'}):
                return name

    @_suitable("english")
    def _english(self, names):
        if self.prefer_long:
            for name in names:
                if "-" in name:
                    return name
        for name in names:
            if "-" not in name and self.prefer_x == name.endswith('x'):
                return name

    @_suitable("espanol")
    @_suitable("español")
    def _espanol(self, names):
        for name in names:
            if self.prefer_x == name.endswith('x'):
                return name

    @_suitable("français")
    def _francais(self, names):
        subset = [name for name in names if self.prefer_accented == ('é' in name)]
        if subset:
            if len(subset) == 1:
                return subset[0]
            names = subset
        for name in names:
            if self.prefer_x == (name.endswith('x')):
                return name


def octave_to_string(n):
    """Convert a numeric value to an octave notation.

    The octave notation consists of zero or more ``'`` or ``,``. The octave
    ``0`` returns the empty string.

    """
    return "," * -n if n < 0 else "'" * n


def octave_from_string(octave):
    """Convert an octave string to a numeric value.

    ``''`` is converted to 2, ``,`` to -1. The empty string gives 0.

    """
    return octave.count("'") - octave.count(",")


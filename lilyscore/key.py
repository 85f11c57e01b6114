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
Classes and functions to deal with key signatures.

A key signature is written as LilyPond's ``\\key`` command, e.g. ``\\key d
\\major``. It can be created from a tonic and a mode, or from the number of
sharps or flats, which is how key signatures are often stored elsewhere
(e.g. in MIDI files)::

    >>> from lilyscore.key import KeySignature
    >>> KeySignature.from_count(2)
    <KeySignature note,alter=1,0 (d) mode=major>
    >>> KeySignature.from_count(-3, "minor")
    <KeySignature note,alter=0,0 (c) mode=minor>

"""

from parce.util import cached_method

from . import pitch
from .errors import InvalidKeySignature


#: The offset of the standard key modes to the default major scale in LilyPond.
mode_offset = {
    'major': 0,
    'minor': 5,
    'ionian': 0,
    'dorian': 1,
    'phrygian': 2,
    'lydian': 3,
    'mixolydian': 4,
    'aeolian': 5,
    'locrian': 6,
}

#: The maximum number of sharps or flats in a key signature.
MAX_ACCIDENTALS = 7


def _int(value):
    """Return int if val is integer."""
    i = int(value)
    return i if value == i else value


def alterations(offset, scale=None):
    """Return the list of alterations for the specified offset.

    The list has the same length as the :py:data:`scale <.pitch.MAJOR_SCALE>`.
    The ``offset`` is the number of notes to shift the scale; the returned
    alterations are those needed to play the scale starting at that step
    starting on C instead. For example::

        >>> alterations(0)
        [0, 0, 0, 0, 0, 0, 0]
        >>> alterations(1)
        [0, 0, -0.5, 0, 0, 0, -0.5]

    """
    scale = scale or pitch.MAJOR_SCALE
    l = len(scale)
    offset %= l
    alter = scale[offset] - scale[0]
    return [_int(scale[step % l] + step // l * 6 - scale[orig] - alter)
                for step, orig in enumerate(range(l), offset)]


def accidentals(note, alter=0, mode=None, scale=None):
    """Return the list of 7 alterations for the specified key signature.

    The ``note`` is a note from 0..6; the ``alter`` is the alteration of that
    note in whole tones, and the ``mode``, if given, is a list of 7 alterations
    describing the mode. By default the major mode is used. Examples::

        >>> accidentals(1, 0)                         # D major
        [0.5, 0, 0, 0.5, 0, 0, 0]
        >>> accidentals(1, 0, alterations(5))         # D minor
        [0, 0, 0, 0, 0, 0, -0.5]

    """
    scale = scale or pitch.MAJOR_SCALE
    if mode is None:
        mode = alterations(0, scale)
    note %= len(scale)
    steps = alterations(note, scale)
    accs = [_int(m - s + alter) for m, s in zip(mode, steps)]
    return accs[-note:] + accs[:-note]  # rotate so C is always at start


def chromatic_scale(note=0, alter=0, scale=None, flats=None):
    """Return a default chromatic scale, based on the ``scale``.

    Every item in the scale is a tuple(note, alter). Uses sharps for altered
    notes, unless a pitch value is in the ``flats`` list. If ``note`` and/or
    ``alter`` are given, the scale is transposed and rotated as if it where in
    that key.

    """
    scale = scale or pitch.MAJOR_SCALE
    flats = pitch.MAJOR_FLATS if flats is None else flats

    def chrom_scale():
        """Yield a chromatic scale."""
        note = 0
        for step in range(12):
            p = step / 2
            if note < len(scale)-1 and (p in flats or p == scale[note+1]):
                note += 1
            yield note, p - scale[note]

    def transpose(notes):
        """Transpose a chromatic scale."""
        l = len(scale)
        for n, a in notes:
            doct, new_note = divmod(n + note, l)
            new_alter = a + alter - doct * 6 - scale[new_note] + scale[n]
            yield new_note, _int(new_alter)

    alter += scale[note] - scale[0]
    notes = list(transpose(chrom_scale()))
    semitones = int(alter * 2)
    return notes[-semitones:] + notes[:-semitones]  # rotate so C-based pitch is at start


def tonic(sf, scale=None):
    """Return the tuple(note, alter) which is the musical tonic for the major
    scale with the given number of sharps or flats ``sf``.

    If ``sf`` is negative, it is the number of flats, otherwise it is the
    number of sharps. For the tonic of a minor key, add 3 sharps: four flats
    minor is ``tonic(-4 + 3)``, which is ``(3, 0)``, F.

    """
    scale = scale or pitch.MAJOR_SCALE
    l = len(scale)
    note, alter = 0, 0
    d = 1 if sf > 0 else -1 if sf < 0 else 0
    for _ in range(d * sf):
        doct, new_note = divmod(note + d * 4, l)
        alter += d * 3.5 - doct * 6 - scale[new_note] + scale[note]
        note = new_note
    return note, _int(alter)


class KeySignature:
    r"""Represents a key signature, LilyPond's ``\key`` command.

    The ``note`` (0..6) and ``alter`` attributes represent the tonic, and the
    ``mode`` one of the standard mode names in :py:data:`mode_offset`.

    Instantiating never fails; :meth:`validate` raises
    :class:`~.errors.InvalidKeySignature` if the key would need more than
    seven sharps or flats, or uses an unknown mode.

    """
    def __init__(self, note=0, alter=0, mode="major"):
        self.note = note        #: The note (0..6).
        self.alter = alter      #: The alteration in whole tones (0 by default).
        self.mode = mode        #: The mode (a standard LilyPond mode name like "major").
        #: The tuple of pitch values in the default scale to give a flat instead
        #: of a sharp when converting a MIDI key number to a pitch.
        self.flats = pitch.MAJOR_FLATS

    @classmethod
    def from_count(cls, count, mode="major"):
        """Return a KeySignature with ``count`` sharps (or flats, if negative).

        Raises :class:`~.errors.InvalidKeySignature` when there are more
        than seven sharps or flats or the mode is unknown.

        """
        if isinstance(count, bool) or not isinstance(count, int) \
                or abs(count) > MAX_ACCIDENTALS:
            raise InvalidKeySignature("invalid number of sharps or flats: {!r}".format(count))
        if mode not in mode_offset:
            raise InvalidKeySignature("unknown mode: {!r}".format(mode))
        # the tonic of the mode is a step of the major scale with the same accidentals
        note, alter = tonic(count)
        new_note = (note + mode_offset[mode]) % len(pitch.MAJOR_SCALE)
        return cls(new_note, accidentals(note, alter)[new_note], mode)

    def __repr__(self):
        p = pitch.Pitch(-1, self.note, self.alter)
        return "<{} note,alter={},{} ({}) mode={}>".format(type(self).__name__,
            self.note, self.alter, p, self.mode)

    def __eq__(self, other):
        if isinstance(other, KeySignature):
            return (self.note, self.alter, self.mode) == (other.note, other.alter, other.mode)
        return NotImplemented

    def __hash__(self):
        return hash((self.note, self.alter, self.mode))

    @property
    def accidentals(self):
        """The list of 7 alterations (C..B) this key signature implies."""
        return accidentals(self.note, self.alter, alterations(mode_offset[self.mode]))

    def count(self):
        """Return the number of sharps (positive) or flats (negative)."""
        return int(sum(self.accidentals) * 2)

    def validate(self):
        """Raise :class:`~.errors.InvalidKeySignature` if we can't be written."""
        if self.mode not in mode_offset:
            raise InvalidKeySignature("unknown mode: {!r}".format(self.mode))
        if isinstance(self.note, bool) or not isinstance(self.note, int) \
                or not 0 <= self.note < len(pitch.MAJOR_SCALE):
            raise InvalidKeySignature("invalid tonic note: {!r}".format(self.note))
        if self.alter not in (-0.5, 0, 0.5):
            raise InvalidKeySignature("invalid tonic alteration: {!r}".format(self.alter))
        accs = self.accidentals
        if any(abs(a) > 0.5 for a in accs) or (any(a > 0 for a in accs) and any(a < 0 for a in accs)):
            raise InvalidKeySignature("key signature needs more than {} sharps or flats".format(
                MAX_ACCIDENTALS))

    def tonic_pitch(self):
        """Return the tonic as a :class:`~.pitch.Pitch` (without octave marks)."""
        return pitch.Pitch(-1, self.note, self.alter)

    def pitch(self, key, flats=None):
        """Return a :class:`~.pitch.Pitch` representing the MIDI ``key`` number.

        The pitch's note and alteration are chosen so that they logically fit
        in the key signature. The optional ``flats`` parameter is a list of
        pitch values that get flats instead of sharps (if they are not base
        steps of the current key signature). By default, the :attr:`flats`
        attribute is read. For example, in B-flat minor::

            >>> sig = KeySignature(6, -0.5, "minor")
            >>> sig.pitch(63)
            <Pitch octave=0, note=2, alter=-0.5 (ees')>

        """
        if flats is None:
            flats = self.flats
        return self._midi_reader(tuple(flats))(key)

    @cached_method
    def _midi_reader(self, flats):
        """Return a callable that converts a MIDI key number to a sensible
        :class:`~.pitch.Pitch` for this key signature."""
        scale = pitch.MAJOR_SCALE
        # cache for 12 semitones, get a default chromatic scale
        steps = list(chromatic_scale(self.note, self.alter, scale, flats))
        # fill in the base tones from the scale (note, alter)
        for note, (base, alter) in enumerate(zip(scale, self.accidentals)):
            step = int((base + alter) * 2) % 12
            steps[step] = (note, alter)
        # add octave
        octave = lambda p: -1 if p > 6 else 1 if p < 0 else 0
        steps = [(octave(note + alter) - 5, note, alter) for note, alter in steps]

        def from_midi(key):
            """Return a Pitch from the MIDI key number."""
            octave, step = divmod(key, 12)
            base_octave, note, alter = steps[step]
            return pitch.Pitch(octave + base_octave, note, alter)

        return from_midi


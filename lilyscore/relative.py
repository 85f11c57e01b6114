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


r"""
Utilities to write and read music in relative pitches.

Inside LilyPond's ``\relative`` mode a pitch without octave marks is the one
closest to the previous pitch, so only octave jumps larger than a fourth need
``'`` or ``,``. Inside a chord, every pitch is relative to the pitch before
it, and the event after a chord is relative to the first pitch of the chord.
Rests and skips do not change the reference pitch.

"""

from .pitch import Pitch, PitchProcessor


class Abs2rel:
    r"""Compute the relative pitch names for a sequence of events.

    :attr:`processor`: a :class:`~.pitch.PitchProcessor`; a default one is used
    if none is specified.

    :attr:`start_pitch`: if True, a starting pitch is written after the
    ``\relative`` command, derived from the first pitch of the music.

    :attr:`first_pitch_absolute`: if :attr:`start_pitch` is False, determines
    the meaning of the first pitch. If True, the first pitch is considered to
    be absolute, which is LilyPond >= 2.18 behaviour. If False, the first pitch
    is relative to c', the behaviour of LilyPond < 2.18.

    You may change these attributes after instantiation.

    """
    def __init__(self, processor=None, start_pitch=True, first_pitch_absolute=True):
        #: The :class:`~.pitch.PitchProcessor`; a default one is used if None is specified.
        self.processor = processor
        #: Whether to write a starting pitch after the ``\relative`` command.
        self.start_pitch = start_pitch
        #: Whether to consider the first pitch absolute if a start pitch is not used.
        self.first_pitch_absolute = first_pitch_absolute

    def get_start_pitch(self, pitch):
        """Return the start pitch to write for music beginning with ``pitch``.

        This is the C in the octave of the pitch, or the C above it when the
        pitch is a G, A or B, so that the first pitch needs no octave marks.

        """
        start = Pitch(pitch.octave, 0, 0)
        if pitch.note > 3:
            start.octave += 1
        return start

    def _initial_pitch(self):
        """Return the reference pitch when no start pitch is written."""
        return Pitch(-1, 3, 0) if self.first_pitch_absolute else Pitch(0, 0, 0)

    def convert(self, events):
        """Return a two-tuple(start_pitch, names) for the events.

        The ``start_pitch`` is the :class:`~.pitch.Pitch` to write after the
        ``\relative`` command, or None if no start pitch is to be written (or
        the events have no pitches at all). The ``names`` is a list with, for
        every event, the list of relative pitch strings (empty for rests).

        Raises a :obj:`KeyError` if the language has no name for a pitch.

        """
        processor = self.processor or PitchProcessor()
        events = list(events)

        start = None
        if self.start_pitch:
            for event in events:
                pitches = event.pitches()
                if pitches:
                    start = self.get_start_pitch(pitches[0])
                    break
        last_pitch = start or self._initial_pitch()

        names = []
        for event in events:
            stack = [last_pitch]
            strings = []
            for p in event.pitches():
                strings.append(processor.relative_string(p, stack[-1]))
                stack.append(p)
            last_pitch = stack[:2][-1]  # first of chord or the old if no pitches
            names.append(strings)
        return start, names


class Rel2abs:
    """Read relative pitch names back to absolute :class:`~.pitch.Pitch` objects.

    This is the inverse of :class:`Abs2rel`, with the same attributes.

    """
    def __init__(self, processor=None, first_pitch_absolute=True):
        self.processor = processor
        self.first_pitch_absolute = first_pitch_absolute

    def convert(self, names, start_pitch=None):
        """Return a list of lists of Pitch objects for the list of lists of names.

        The ``start_pitch`` is the pitch name written after ``\\relative``, if
        any.

        """
        processor = self.processor or PitchProcessor()
        if start_pitch:
            last_pitch = processor.pitch(start_pitch)
        elif self.first_pitch_absolute:
            last_pitch = Pitch(-1, 3, 0)
        else:
            last_pitch = Pitch(0, 0, 0)

        result = []
        for strings in names:
            stack = [last_pitch]
            pitches = []
            for name in strings:
                p = processor.pitch(name)
                # keep only the octave marks, the rest comes from the previous pitch
                p.octave -= processor.pitch(name.rstrip("',")).octave
                p.make_absolute(stack[-1])
                stack.append(p)
                pitches.append(p)
            last_pitch = stack[:2][-1]
            result.append(pitches)
        return result


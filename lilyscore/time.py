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
Time signatures, and functionality to compute the time length of music.

The length of music is a :class:`~fractions.Fraction` where a whole note is
1. For example::

    >>> from lilyscore import music, time
    >>> from lilyscore.duration import Duration
    >>> m = music.Measure([music.Rest(Duration(4, 1)), music.Rest(Duration(8))])
    >>> time.length(m)
    Fraction(1, 2)

The length of a measure is not checked against the time signature; use
:meth:`TimeSignature.length` to compare them yourself if desired.

"""

import fractions

from . import music
from .errors import InvalidTimeSignature


class TimeSignature:
    r"""Represents a time signature, LilyPond's ``\time`` command.

    The ``numerator`` is the number of beats in a measure, the
    ``denominator`` the note value of one beat (a power of two).

    """
    def __init__(self, numerator=4, denominator=4):
        self.numerator = numerator
        self.denominator = denominator

    def __repr__(self):
        return "<{} {}/{}>".format(type(self).__name__, self.numerator, self.denominator)

    def __eq__(self, other):
        if isinstance(other, TimeSignature):
            return (self.numerator, self.denominator) == (other.numerator, other.denominator)
        return NotImplemented

    def __hash__(self):
        return hash((self.numerator, self.denominator))

    def validate(self):
        """Raise :class:`~.errors.InvalidTimeSignature` if we can't be written."""
        n, d = self.numerator, self.denominator
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise InvalidTimeSignature("invalid number of beats: {!r}".format(n))
        if isinstance(d, bool) or not isinstance(d, int) or d < 1 or d & (d - 1):
            raise InvalidTimeSignature("beat value must be a power of two: {!r}".format(d))

    def length(self):
        """Return the length of one full measure."""
        return fractions.Fraction(self.numerator, self.denominator)

    def to_string(self):
        """Return the fraction notation, e.g. ``'3/4'``."""
        return "{}/{}".format(self.numerator, self.denominator)


def length(node):
    """Return the musical length of a node of the music tree.

    Events have the length of their duration, a measure and a voice the sum
    of their children, and a score the length of its longest voice. Raises
    :class:`~.errors.InvalidDuration` if an event has an invalid duration.

    """
    if isinstance(node, music.Event):
        return node.duration.length()
    elif isinstance(node, music.Score):
        return max(map(length, node), default=fractions.Fraction(0))
    elif isinstance(node, (music.Measure, music.Voice)):
        return sum(map(length, node), fractions.Fraction(0))
    raise TypeError("can't compute the length of {!r}".format(node))


def positions(measure):
    """Yield (event, position) tuples for the events in the measure.

    The position is the time offset of the event from the start of the
    measure.

    """
    pos = fractions.Fraction(0)
    for event in measure:
        yield event, pos
        pos += length(event)


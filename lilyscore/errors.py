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
Exceptions raised when a score can't be rendered.

Every exception is a :class:`ValueError` and knows where in the score tree
the offending value lives, using the ``voice``, ``measure`` and ``event``
indices. An index that does not apply (e.g. for a key signature on a voice)
is None. For example::

    >>> from lilyscore.errors import InvalidDuration
    >>> str(InvalidDuration("invalid duration denominator: 3", 0, 1, 2))
    'voice 0, measure 1, event 2: invalid duration denominator: 3'

"""


class RenderError(ValueError):
    """Base class for all errors that prevent rendering a score."""
    def __init__(self, message, voice=None, measure=None, event=None):
        super().__init__(message)
        self.message = message  #: The description of the problem.
        self.voice = voice      #: Index of the voice in the score, or None.
        self.measure = measure  #: Index of the measure in the voice, or None.
        self.event = event      #: Index of the event in the measure, or None.

    def position(self):
        """Return the tuple (voice, measure, event)."""
        return self.voice, self.measure, self.event

    def located(self, voice=None, measure=None, event=None):
        """Return a copy of this error with the unset indices filled in."""
        return type(self)(self.message,
            self.voice if self.voice is not None else voice,
            self.measure if self.measure is not None else measure,
            self.event if self.event is not None else event)

    def __str__(self):
        where = ", ".join("{} {}".format(name, index)
            for name, index in zip(("voice", "measure", "event"), self.position())
                if index is not None)
        return "{}: {}".format(where, self.message) if where else self.message

    def __repr__(self):
        return "<{} {}>".format(type(self).__name__, str(self))


class InvalidDuration(RenderError):
    """A duration that can't be written in LilyPond's note value notation."""


class InvalidPitch(RenderError):
    """A pitch with an unknown note, alteration or an out-of-range octave."""


class InvalidKeySignature(RenderError):
    """A key signature with too many accidentals or an unknown mode."""


class InvalidTimeSignature(RenderError):
    """A time signature that LilyPond can't represent."""


class EmptyScore(RenderError):
    """Raised for a score without voices, if the writer does not allow that."""


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
Functions and a value type to deal with LilyPond's musical durations.

A duration value is a :class:`~fractions.Fraction` or an integer, where a
whole note is 1. A duration can be split in two values, log and dot-count,
where the log value is 0 for a whole note, 1 for a half note, 2 for a
crotchet, -1 for a ``\\breve``, etc. This is the same way LilyPond handles
durations.

The :class:`Duration` class is the duration as stored in the music model: a
note value denominator (1 for a whole note, 4 for a crotchet), a number of
dots and an optional scaling factor.

"""

import fractions
import math
import re

from .errors import InvalidDuration


NAMED_DURATIONS = ('breve', 'longa', 'maxima')

#: The note value denominators a :class:`Duration` may have.
DENOMINATORS = (1, 2, 4, 8, 16, 32, 64, 128)

_RE_MATCH_DURATION = re.compile(r"(\d+)(\.*)(?:\*(\d+(?:/\d+)?))?").fullmatch


def log_dotcount(value):
    r"""Return the integer two-tuple (log, dotcount) for the duration value.

    The ``value`` may be a Fraction, integer or floating point value.

    The returned log is 0 for a whole note, 1 for a half note, 2 for a
    crotchet, -1 for a ``\\breve``, etc. For example::

        >>> from lilyscore.duration import log_dotcount
        >>> log_dotcount(1)
        (0, 0)
        >>> log_dotcount(1/4)
        (2, 0)
        >>> log_dotcount(3/4)
        (1, 1)
        >>> log_dotcount(7/16)
        (2, 2)

    The value is truncated to a duration that can be expressed by a note length
    and a number of dots.

    """
    mantisse, exponent = math.frexp(value)
    dotcount = int(-1 - math.log2(1 - mantisse))
    log = 1 - exponent
    return log, dotcount


def duration(log, dotcount=0):
    r"""Return the duration as a Fraction.

    See for an explanation of the ``log`` and ``dotcount`` values
    :func:`log_dotcount`.

    """
    numer = ((2 << dotcount) - 1) << 3
    denom = 1 << (dotcount + log + 3)
    return fractions.Fraction(numer, denom)


def to_string(value):
    r"""Convert the value (most times a Fraction) to a LilyPond string notation.

    The value is truncated to a duration that can be expressed by a note length
    and a number of dots. For example::

        >>> from fractions import Fraction
        >>> from lilyscore.duration import to_string
        >>> to_string(Fraction(3, 8))
        '4.'
        >>> to_string(2)
        '\\breve'

    Raises an IndexError if the base duration is too long (longer than
    ``\maxima``).

    """
    log, dotcount = log_dotcount(value)
    if log < 0:
        dur = '\\' + NAMED_DURATIONS[-1-log]
    else:
        dur = 1 << log
    return '{}{}'.format(dur, '.' * dotcount)


def from_string(text, dotcount=None):
    r"""Convert a LilyPond duration string (e.g. ``'4.'``) to a Fraction.

    The durations ``\breve``, ``\longa`` and ``\maxima`` may be used with or
    without backslash. If ``dotcount`` is None, the dots are expected to be in
    the ``text``.

    For example::

        >>> from lilyscore.duration import from_string
        >>> from_string('8')
        Fraction(1, 8)
        >>> from_string('8..')
        Fraction(7, 32)

    Raises a ValueError if an invalid duration is specified.

    """
    if dotcount is None:
        dotcount = text.count('.')
    text = text.strip(' \t.')
    try:
        log = int(text).bit_length() - 1
    except ValueError:
        log = -1 - NAMED_DURATIONS.index(text.lstrip('\\'))
    return duration(log, dotcount)


def scaling_to_string(scaling):
    """Return the LilyPond notation for a scaling factor, e.g. ``'*2/3'``.

    A scaling of 1 returns the empty string.

    """
    scaling = fractions.Fraction(scaling)
    if scaling == 1:
        return ''
    elif scaling.denominator == 1:
        return '*{}'.format(scaling.numerator)
    return '*{}/{}'.format(scaling.numerator, scaling.denominator)


class Duration:
    """The duration of a note, rest, skip or chord.

    The ``denominator`` is the note value: 1 for a whole note, 2 for a half
    note, 4 for a crotchet, up to 128. The ``dots`` is the number of
    augmentation dots, and ``scaling`` an optional multiplier (e.g.
    ``Fraction(2, 3)`` for a triplet note).

    Instantiating never fails, even for values LilyPond can't represent; call
    :meth:`validate` to check, which the writer does before rendering.

    """
    def __init__(self, denominator=4, dots=0, scaling=1):
        self.denominator = denominator
        self.dots = dots
        self.scaling = scaling

    @classmethod
    def from_fraction(cls, value):
        """Return a Duration for the Fraction ``value`` of a whole note.

        Raises :class:`~.errors.InvalidDuration` when the value can't be
        expressed as a single note value with dots.

        """
        value = fractions.Fraction(value)
        if value <= 0:
            raise InvalidDuration("duration must be positive: {}".format(value))
        log, dots = log_dotcount(value)
        if duration(log, dots) != value or not 0 <= log < len(DENOMINATORS):
            raise InvalidDuration("can't express {} as a note value".format(value))
        return cls(1 << log, dots)

    @classmethod
    def from_string(cls, text):
        """Return a Duration from a LilyPond duration token like ``'8.'``.

        A scaling suffix (``*2/3``) is also understood.
        Raises :class:`~.errors.InvalidDuration` for a token that can't be a
        Duration, like ``'3'`` or ``'breve'``.

        """
        m = _RE_MATCH_DURATION(text.strip())
        if not m or int(m.group(1)) not in DENOMINATORS:
            raise InvalidDuration("invalid duration: {!r}".format(text))
        try:
            scaling = fractions.Fraction(m.group(3) or 1)
        except ZeroDivisionError:
            scaling = 0
        if scaling <= 0:
            raise InvalidDuration("scaling must be positive: {!r}".format(text))
        return cls(int(m.group(1)), len(m.group(2)), scaling)

    def __repr__(self):
        return "<{} {}>".format(type(self).__name__, self.to_string())

    def _as_tuple(self):
        return (self.denominator, self.dots, fractions.Fraction(self.scaling))

    def __eq__(self, other):
        if isinstance(other, Duration):
            return self._as_tuple() == other._as_tuple()
        return NotImplemented

    def __hash__(self):
        return hash(self._as_tuple())

    def copy(self):
        """Return a new Duration with our attributes."""
        return type(self)(self.denominator, self.dots, self.scaling)

    @property
    def log(self):
        """The log value: 0 for a whole note, 2 for a crotchet, etc."""
        return self.denominator.bit_length() - 1

    def length(self):
        """Return the musical length as a Fraction, a whole note being 1.

        Raises :class:`~.errors.InvalidDuration` if the duration is invalid.

        """
        self.validate()
        return duration(self.log, self.dots) * self.scaling

    def validate(self, max_dots=None):
        """Raise :class:`~.errors.InvalidDuration` if we can't be written.

        If ``max_dots`` is given, more dots than that also count as invalid.

        """
        d = self.denominator
        if isinstance(d, bool) or not isinstance(d, int) or d not in DENOMINATORS:
            raise InvalidDuration("invalid duration denominator: {!r}".format(d))
        if isinstance(self.dots, bool) or not isinstance(self.dots, int) or self.dots < 0:
            raise InvalidDuration("invalid dot count: {!r}".format(self.dots))
        if max_dots is not None and self.dots > max_dots:
            raise InvalidDuration("too many dots: {} (at most {})".format(self.dots, max_dots))
        try:
            scaling = fractions.Fraction(self.scaling)
        except (TypeError, ValueError):
            raise InvalidDuration("invalid scaling: {!r}".format(self.scaling)) from None
        if scaling <= 0:
            raise InvalidDuration("scaling must be positive: {}".format(scaling))

    def to_string(self):
        """Return the LilyPond notation, e.g. ``'4'``, ``'8..'`` or ``'2*2/3'``.

        Does not validate; use :meth:`validate` first.

        """
        return '{}{}{}'.format(self.denominator, '.' * self.dots,
            scaling_to_string(self.scaling) if self.scaling != 1 else '')


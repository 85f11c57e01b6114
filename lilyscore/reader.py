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
Read single LilyPond event tokens back into music events.

A token is a note, chord, rest or skip with an optional duration and tie, in
absolute octave notation, like the writer produces with ``relative=False``::

    >>> from lilyscore.reader import read_event
    >>> read_event("fisis,,,64.")
    <Note fisis,,,64.>
    >>> read_event("<c e g>2.~")
    <Chord <c e g>2.>
    >>> read_event("r8", "english")
    <Rest 8>

A missing duration means a crotchet.

"""

import re

from . import music
from .duration import Duration
from .errors import InvalidPitch
from .pitch import PitchProcessor


_NAME = r"[^\W\d_](?:[^\W\d_]|-)*[',]*"

_RE_MATCH_EVENT = re.compile(r"""
    (?:
        (?P<rest>[rs])
      | <(?P<chord>[^<>]*)>
      | (?P<pitch>{name})
    )
    (?P<duration>[\d.*/]*)
    (?P<tie>~?)
""".format(name=_NAME), re.VERBOSE).fullmatch

_RE_MATCH_NAME = re.compile(_NAME).fullmatch


def read_pitch(name, processor):
    """Return the absolute :class:`~.pitch.Pitch` for the name with octave marks.

    Raises :class:`~.errors.InvalidPitch` if the language does not know it.

    """
    if not _RE_MATCH_NAME(name):
        raise InvalidPitch("invalid pitch name: {!r}".format(name))
    try:
        return processor.pitch(name)
    except KeyError:
        raise InvalidPitch("unknown pitch name in {}: {!r}".format(
            processor.language, name)) from None


def read_event(text, language="nederlands"):
    """Return a Note, Chord, Rest or Skip for the token ``text``.

    Raises :class:`~.errors.InvalidPitch` for a token that can't be read or
    contains an unknown pitch name, and :class:`~.errors.InvalidDuration` for
    a bad duration. A :obj:`KeyError` is raised for an unknown language.

    """
    processor = PitchProcessor(language)
    m = _RE_MATCH_EVENT(text.strip())
    if not m:
        raise InvalidPitch("can't read event: {!r}".format(text))
    duration = Duration.from_string(m.group('duration')) if m.group('duration') else Duration()
    tie = bool(m.group('tie'))
    if m.group('rest'):
        if tie:
            raise InvalidPitch("a rest can't be tied: {!r}".format(text))
        cls = music.Rest if m.group('rest') == 'r' else music.Skip
        return cls(duration)
    elif m.group('pitch'):
        return music.Note(read_pitch(m.group('pitch'), processor), duration, tie)
    names = m.group('chord').split()
    if not names:
        raise InvalidPitch("chord without pitches: {!r}".format(text))
    return music.Chord([read_pitch(name, processor) for name in names], duration, tie)


def read_measure(text, language="nederlands"):
    """Return a :class:`~.music.Measure` with the events in the text.

    The tokens are separated by whitespace; a bar check ``|`` is ignored.

    """
    tokens = re.findall(r"<[^<>]*>\S*|[^\s|]+", text)
    return music.Measure(read_event(token, language) for token in tokens)

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
Write a :class:`~.music.Score` as a LilyPond document.

The :class:`Writer` walks the score depth-first, in order: voices, measures
and events are written in the order they were added. Preferences are
attributes of the Writer, that can be given as keyword arguments on
instantiation. For example::

    >>> from lilyscore import music, render
    >>> from lilyscore.pitch import Pitch
    >>> from lilyscore.duration import Duration
    >>> score = music.Score([music.Voice([music.Measure([
    ...     music.Note(Pitch.from_name('C', 4)), music.Rest(Duration(8))])])])
    >>> print(render(score))
    \version "2.24.0"
    <BLANKLINE>
    \new Voice \relative c' {
      c4 r8
    }

Before anything is written, the whole score is validated, so either the full
document is returned or a :class:`~.errors.RenderError` is raised that tells
which voice, measure and event is the culprit.

"""

import logging
import re

import parce.util

from . import music
from .errors import EmptyScore, InvalidPitch, RenderError
from .markup import Markup, quote
from .pitch import PitchProcessor
from .relative import Abs2rel


logger = logging.getLogger(__name__)

_RE_MATCH_FIELD = re.compile(r"[a-zA-Z]+(?:[-_][a-zA-Z]+)*").fullmatch

#: The prefix characters for markup in the direction UP, DOWN or neutral.
_DIRECTIONS = {music.UP: '^', music.DOWN: '_', None: '-'}


class Writer:
    """Writes a Score as LilyPond text.

    All preferences are class attributes that can be overridden per instance,
    either by setting the attribute or by giving it as a keyword argument::

        >>> w = Writer(language="english", relative=False)

    Rendering does not alter the Writer or the score, so a Writer can be used
    for many scores, also in parallel.

    """
    #: The LilyPond version to write in the ``\version`` command.
    version = "2.24.0"

    #: The pitch name language; ``\language`` is written if not "nederlands".
    language = "nederlands"

    #: Write music in ``\relative`` mode (True) or absolute (False).
    relative = True

    #: In relative mode, write a start pitch after ``\relative``.
    start_pitch = True

    #: The number of spaces for every indent level.
    indent_width = 2

    #: The maximum number of dots a duration may have.
    max_dots = 4

    #: The lowest scientific octave number a pitch may have.
    min_octave = 0

    #: The highest scientific octave number a pitch may have.
    max_octave = 9

    #: Whether a score without voices may be rendered (with an empty body).
    allow_empty = True

    #: Write a bar check ``|`` after every measure except the last.
    bar_checks = True

    #: Leave out a duration if it's the same as that of the previous event.
    omit_repeated_durations = False

    #: Prefer long pitch names in english, e.g. ``c-sharp`` above ``cs``.
    prefer_long = PitchProcessor.prefer_long

    #: Prefer accented pitch names in francais, e.g. ``ré`` above ``re``.
    prefer_accented = PitchProcessor.prefer_accented

    #: Prefer ``x`` for double sharps, e.g. ``cx`` above ``css`` in english.
    prefer_x = PitchProcessor.prefer_x

    #: Prefer ``es`` and ``as`` above ``ees`` and ``aes`` in nederlands.
    prefer_classic = PitchProcessor.prefer_classic

    def __init__(self, **preferences):
        for name, value in preferences.items():
            if name.startswith('_') or callable(getattr(type(self), name, None)) \
                    or not hasattr(type(self), name):
                raise TypeError("unknown preference: {!r}".format(name))
            setattr(self, name, value)

    def __repr__(self):
        return "<{} language={} relative={}>".format(
            type(self).__name__, self.language, self.relative)

    def pitch_processor(self):
        """Return a :class:`~.pitch.PitchProcessor` for our language.

        Raises a :obj:`KeyError` if the language is unknown.

        """
        processor = PitchProcessor(self.language)
        processor.prefer_long = self.prefer_long
        processor.prefer_accented = self.prefer_accented
        processor.prefer_x = self.prefer_x
        processor.prefer_classic = self.prefer_classic
        return processor

    def abs2rel(self, processor):
        """Return an :class:`~.relative.Abs2rel` to convert pitches."""
        return Abs2rel(processor, self.start_pitch, first_pitch_absolute=True)

    def indent(self, level=1):
        """Return the whitespace for the indent level."""
        return ' ' * (self.indent_width * level)

    # validation

    def validate(self, score):
        """Check the whole score, raising the first error found.

        Raises :class:`~.errors.EmptyScore` if the score has no voices and
        :attr:`allow_empty` is False, and other :class:`~.errors.RenderError`
        subclasses for invalid values, with the position filled in.

        """
        if not len(score) and not self.allow_empty:
            raise EmptyScore("score has no voices")
        for name, value in score.header.items():
            if not isinstance(name, str) or not _RE_MATCH_FIELD(name):
                raise RenderError("invalid header field name: {!r}".format(name))
            if isinstance(value, Markup):
                try:
                    value.to_string()
                except ValueError as e:
                    raise RenderError("header field {}: {}".format(name, e)) from None
        processor = self.pitch_processor()
        for v, voice in enumerate(score):
            try:
                if voice.key is not None:
                    voice.key.validate()
                if voice.time is not None:
                    voice.time.validate()
            except RenderError as e:
                raise e.located(v) from None
            for m, measure in enumerate(voice):
                for e, event in enumerate(measure):
                    try:
                        self.validate_event(event, processor)
                    except RenderError as err:
                        raise err.located(v, m, e) from None

    def validate_event(self, event, processor):
        """Check a single event, raising a :class:`~.errors.RenderError`."""
        if not isinstance(event, music.Event):
            raise TypeError("not a music event: {!r}".format(event))
        event.duration.validate(self.max_dots)
        if isinstance(event, music.Chord) and not event.pitches():
            raise InvalidPitch("chord without pitches")
        for p in event.pitches():
            p.validate(self.min_octave, self.max_octave)
            try:
                processor.name_octave(p)
            except KeyError:
                raise InvalidPitch("no pitch name in {} for note {}, alteration {}".format(
                    processor.language, p.name, p.alter)) from None
        markup = getattr(event, 'markup', None)
        if markup is not None:
            try:
                markup.to_string()
            except ValueError as e:
                raise RenderError(str(e)) from None

    # writing

    def render(self, score):
        """Return the LilyPond document for the :class:`~.music.Score`."""
        self.validate(score)
        logger.debug("rendering score with %d voice(s), language=%s, relative=%s",
            len(score), self.language, self.relative)
        processor = self.pitch_processor()

        lines = [r'\version {}'.format(quote(self.version))]
        if self.language != "nederlands":
            lines.append(r'\language {}'.format(quote(self.language)))
        if score.header:
            lines.append('')
            lines.extend(self.header_lines(score.header))

        voices = [self.voice_lines(voice, processor) for voice in score]
        if len(voices) == 1:
            lines.append('')
            lines.extend(voices[0])
        elif voices:
            lines.append('')
            lines.append('<<')
            for voice_lines in voices:
                lines.extend(self.indent() + line for line in voice_lines)
            lines.append('>>')
        text = '\n'.join(lines) + '\n'
        logger.debug("rendered %d characters", len(text))
        return text

    def header_lines(self, header):
        r"""Return the lines of the ``\header`` block."""
        lines = [r'\header {']
        for name, value in header.items():
            if isinstance(value, Markup):
                value = value.to_string()
            else:
                value = quote(str(value))
            lines.append('{}{} = {}'.format(self.indent(), name, value))
        lines.append('}')
        return lines

    def voice_lines(self, voice, processor):
        r"""Return the lines of a ``\new Voice`` block."""
        events = list(voice.events())
        head = [r'\new Voice']
        if voice.name:
            head.append('= ' + quote(voice.name))
        if self.relative:
            start, names = self.abs2rel(processor).convert(events)
            head.append(r'\relative')
            if start is not None:
                head.append(processor.to_string(start))
        else:
            names = [[processor.to_string(p) for p in event.pitches()] for event in events]
        head.append('{')

        indent = self.indent()
        lines = [' '.join(head)]
        if voice.clef:
            lines.append(indent + r'\clef ' + (voice.clef if voice.clef.isalpha() else quote(voice.clef)))
        if voice.key is not None:
            lines.append(indent + r'\key {} \{}'.format(
                processor.to_string(voice.key.tonic_pitch()), voice.key.mode))
        if voice.time is not None:
            lines.append(indent + r'\time ' + voice.time.to_string())

        names = iter(names)
        prev_duration = None
        for index, measure in enumerate(voice):
            tokens = []
            for event in measure:
                duration = event.duration
                if self.omit_repeated_durations and duration == prev_duration:
                    dur = ''
                else:
                    dur = duration.to_string()
                prev_duration = duration
                tokens.append(self.event_token(event, next(names), dur))
            if self.bar_checks and index < len(voice) - 1:
                tokens.append('|')
            if tokens:
                lines.append(indent + ' '.join(tokens))
        lines.append('}')
        return lines

    def event_token(self, event, names, duration):
        """Return the text for one event.

        The ``names`` are the pitch names to write, the ``duration`` the
        duration text (which may be empty).

        """
        for cls in type(event).__mro__:
            token = self._event(cls, event, names, duration)
            if token is not None:
                return token
        raise TypeError("can't write {!r}".format(event))

    def post_events(self, event):
        """Return the text for the tie and markup attached to a note or chord."""
        text = '~' if event.tie else ''
        if event.markup is not None:
            text += _DIRECTIONS.get(event.direction, '-') + event.markup.to_string()
        return text

    _event = parce.util.Dispatcher()

    @_event(music.Note)
    def _note(self, event, names, duration):
        return names[0] + duration + self.post_events(event)

    @_event(music.Chord)
    def _chord(self, event, names, duration):
        return '<{}>'.format(' '.join(names)) + duration + self.post_events(event)

    @_event(music.Rest)
    def _rest(self, event, names, duration):
        return 'r' + duration

    @_event(music.Skip)
    def _skip(self, event, names, duration):
        return 's' + duration


def render(score, **preferences):
    """Return the LilyPond document for the score.

    Convenience function; the keyword arguments are :class:`Writer`
    preferences.

    """
    return Writer(**preferences).render(score)


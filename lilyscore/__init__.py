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
The lilyscore module.

Build a score from :class:`~.music.Score`, :class:`~.music.Voice`,
:class:`~.music.Measure` and event objects, and turn it into a LilyPond
document with :func:`render`::

    >>> import lilyscore
    >>> from lilyscore import Score, Voice, Measure, Note, Rest, Pitch, Duration
    >>> score = Score([Voice([Measure([Note(Pitch.from_name('C', 4)), Rest(Duration(8))])])])
    >>> text = lilyscore.render(score)

"""

from .duration import Duration
from .errors import (
    RenderError, InvalidDuration, InvalidPitch, InvalidKeySignature,
    InvalidTimeSignature, EmptyScore,
)
from .key import KeySignature
from .markup import Markup
from .music import UP, DOWN, Chord, Measure, Note, Rest, Score, Skip, Voice
from .pitch import Pitch, PitchProcessor
from .pkginfo import version, version_string
from .reader import read_event, read_measure
from .time import TimeSignature
from .writer import Writer, render


__all__ = (
    'render', 'Writer', 'read_event', 'read_measure',
    'Score', 'Voice', 'Measure', 'Note', 'Rest', 'Skip', 'Chord', 'UP', 'DOWN',
    'Pitch', 'PitchProcessor', 'Duration', 'KeySignature', 'TimeSignature', 'Markup',
    'RenderError', 'InvalidDuration', 'InvalidPitch', 'InvalidKeySignature',
    'InvalidTimeSignature', 'EmptyScore',
    'version', 'version_string',
)

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
Test the music model.
"""

### find lilyscore
import sys
sys.path.insert(0, '.')

from lilyscore.duration import Duration
from lilyscore.markup import Markup
from lilyscore.music import DOWN, UP, Chord, Measure, Note, Rest, Score, Skip, Voice
from lilyscore.pitch import Pitch


def test_events():
    c = Pitch(0, 0, 0)
    n = Note(c)
    assert n.duration == Duration(4)
    assert n.pitches() == [c]
    assert n.tie is False and n.markup is None and n.direction == UP
    assert Rest().pitches() == []
    assert Skip(Duration(2)).duration == Duration(2)

    assert Note(c) == Note(Pitch(0, 0, 0))
    assert Note(c) != Note(c, tie=True)
    assert Rest() != Skip()
    assert Rest(Duration(8)) == Rest(Duration(8))
    assert len({Rest(), Rest()}) == 1

    ch = Chord([c, Pitch(0, 2, 0)], Duration(2, 1))
    assert ch.pitches() == [c, Pitch(0, 2, 0)]
    assert repr(ch) == "<Chord <c' e'>2.>"
    assert repr(Note(Pitch(-1, 3, 0.5), Duration(8))) == "<Note fis8>"

    # a string markup is converted
    n = Note(c, markup="dolce", direction=DOWN)
    assert n.markup == Markup("dolce")
    assert n.direction == DOWN


def test_containers():
    c = Pitch(0, 0, 0)
    m = Measure([Note(c), Rest()])
    m.append(Skip())
    assert len(m) == 3
    assert repr(m) == "<Measure (3 events)>"

    v = Voice([m, Measure([Note(c)])], name="melody", clef="treble")
    assert list(v.events()) == [Note(c), Rest(), Skip(), Note(c)]
    assert repr(v) == "<Voice (2 measures) 'melody'>"
    assert v == Voice([Measure([Note(c), Rest(), Skip()]), Measure([Note(c)])],
                      name="melody", clef="treble")
    assert v != Voice(list(v), name="other", clef="treble")

    s = Score([v], {"title": "Title"}, composer="Composer")
    assert list(s.header) == ["title", "composer"]
    assert repr(s) == "<Score (1 voice) title='Title' composer='Composer'>"
    assert s != Score([v], title="Title")
    assert Score() == Score()

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
Test lilyscore.errors.
"""

### find lilyscore
import sys
sys.path.insert(0, '.')

from lilyscore.errors import EmptyScore, InvalidDuration, InvalidPitch, RenderError


def test_errors():
    e = InvalidDuration("invalid duration denominator: 3")
    assert isinstance(e, RenderError)
    assert isinstance(e, ValueError)
    assert e.position() == (None, None, None)
    assert str(e) == "invalid duration denominator: 3"

    located = e.located(0, 1, 2)
    assert type(located) is InvalidDuration
    assert located.position() == (0, 1, 2)
    assert str(located) == "voice 0, measure 1, event 2: invalid duration denominator: 3"

    # already known indices are kept
    e = InvalidPitch("bad", voice=3)
    assert e.located(0, 1, 2).position() == (3, 1, 2)
    assert str(e.located(None, 4)) == "voice 3, measure 4: bad"

    assert str(EmptyScore("score has no voices")) == "score has no voices"
    assert repr(e) == "<InvalidPitch voice 3: bad>"

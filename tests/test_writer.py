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
Test writing a score as LilyPond text.
"""

import logging
from fractions import Fraction

import pytest

### find lilyscore
import sys
sys.path.insert(0, '.')

import lilyscore
from lilyscore import (
    Chord, Duration, KeySignature, Markup, Measure, Note, Pitch, PitchProcessor,
    Rest, Score, Skip, TimeSignature, Voice, Writer, render,
)
from lilyscore.errors import (
    EmptyScore, InvalidDuration, InvalidKeySignature, InvalidPitch,
    InvalidTimeSignature, RenderError,
)
from lilyscore.music import DOWN
from lilyscore.duration import DENOMINATORS
from lilyscore.reader import read_measure
from lilyscore.relative import Rel2abs


def pitches(*names):
    p = PitchProcessor()
    return [p.pitch(name) for name in names]


def voice(*measures, **attrs):
    """Return a Voice; every measure is a string of absolute note names."""
    return Voice([Measure(Note(p) for p in pitches(*m.split())) for m in measures], **attrs)


def test_simple():
    score = Score([Voice([Measure([Note(Pitch.from_name('C', 4)), Rest(Duration(8))])])])
    assert render(score) == (
        '\\version "2.24.0"\n'
        '\n'
        '\\new Voice \\relative c\' {\n'
        '  c4 r8\n'
        '}\n')
    # same output every time
    assert render(score) == render(score)
    assert Writer().render(score) == render(score)


def test_layout():
    c, e, g = pitches("c'", "e'", "g'")
    score = Score([Voice([
        Measure([Note(c), Rest(Duration(8)), Chord([c, e, g], Duration(2, 1))]),
        Measure([Note(p) for p in pitches("d'", "e'", "f'")]),
    ], name="melody", clef="treble", key=KeySignature(4, 0), time=TimeSignature(3, 4))],
        title="Title", composer="Composer")
    assert render(score) == (
        '\\version "2.24.0"\n'
        '\n'
        '\\header {\n'
        '  title = "Title"\n'
        '  composer = "Composer"\n'
        '}\n'
        '\n'
        '\\new Voice = "melody" \\relative c\' {\n'
        '  \\clef treble\n'
        '  \\key g \\major\n'
        '  \\time 3/4\n'
        '  c4 r8 <c e g>2. |\n'
        '  d4 e4 f4\n'
        '}\n')


def test_voices():
    score = Score([voice("c'"), voice("c")])
    assert render(score) == (
        '\\version "2.24.0"\n'
        '\n'
        '<<\n'
        '  \\new Voice \\relative c\' {\n'
        '    c4\n'
        '  }\n'
        '  \\new Voice \\relative c {\n'
        '    c4\n'
        '  }\n'
        '>>\n')


def test_order():
    score = Score([voice("c' d' e'", "f' g' a'"), voice("b")])
    text = render(score, relative=False, bar_checks=False)
    assert text.index("c'4 d'4 e'4") < text.index("f'4 g'4 a'4") < text.index("b4")


def test_absolute():
    score = Score([voice("c' b", "g'' bes,,")])
    text = render(score, relative=False)
    assert '\\new Voice {\n' in text
    assert "  c'4 b4 |\n  g''4 bes,,4\n" in text


def test_relative_decodes_to_absolute():
    names = "c' b f'' fis, bes''' d c''''"
    score = Score([voice(names)])

    text = render(score, bar_checks=False)
    head, body = text.split('{\n')[0], text.split('{\n')[1]
    start = head.split()[-1]
    tokens = body.split()[:-1]  # remove closing brace
    relative = [[token.rstrip('0123456789.')] for token in tokens]
    assert Rel2abs().convert(relative, start) == [[p] for p in pitches(*names.split())]

    text = render(score, relative=False, bar_checks=False)
    tokens = text.split('{\n')[1].split()[:-1]
    assert pitches(*(token.rstrip('0123456789.') for token in tokens)) == \
        pitches(*names.split())


def test_events():
    c = Pitch(0, 0, 0)
    score = Score([Voice([Measure([
        Note(c, tie=True),
        Note(c, Duration(8, 1), markup="dolce"),
        Note(c, Duration(16), markup=Markup("a tempo", "italic"), direction=DOWN),
        Chord([c, Pitch(0, 4, 0)], Duration(2), tie=True),
        Skip(Duration(2)),
        Rest(Duration(8, 0, Fraction(2, 3))),
    ])])])
    line = render(score).splitlines()[3]
    assert line == "  c4~ c8.^\\markup { dolce } c16_\\markup \\italic { a tempo } <c g'>2~ s2 r8*2/3"


def test_omit_repeated_durations():
    score = Score([voice("c' d'", "e'"), voice("c'")])
    score[0][0][1].duration = Duration(4)
    score[0][1][0].duration = Duration(8)
    score[0][1].append(Rest(Duration(8)))
    score[0][1].append(Note(Pitch(0, 4, 0), Duration(8)))
    text = render(score, omit_repeated_durations=True)
    assert "    c4 d |\n    e8 r g\n" in text
    # the first event of every voice carries its duration
    assert text.count("c4") == 2


def test_preferences():
    score = Score([voice("c' d'", "e'")])
    text = render(score, bar_checks=False, indent_width=4, version="2.22.0")
    assert text.startswith('\\version "2.22.0"\n')
    assert "\n    c4 d4\n    e4\n" in text

    w = Writer(language="english")
    w.relative = False
    assert w.language == "english"
    assert Writer.language == "nederlands"
    with pytest.raises(TypeError):
        Writer(no_such_preference=True)
    with pytest.raises(TypeError):
        Writer(render=None)


def test_language():
    score = Score([voice("fis' bes'")])
    score[0].key = KeySignature(3, 0.5, "minor")
    text = render(score, language="english")
    assert '\\language "english"\n' in text
    assert '\\key fs \\minor\n' in text
    assert "fs4 bf4" in text

    text = render(score, language="deutsch")
    assert '\\language "deutsch"\n' in text
    assert "fis4 b4" in text

    text = render(score)
    assert '\\language' not in text

    with pytest.raises(KeyError):
        render(score, language="klingon")


def test_pitch_name_preferences():
    score = Score([voice("cis' es' disis'")])
    assert "cis4 es4 disis4" in render(score)
    assert "cis4 ees4 disis4" in render(score, prefer_classic=False)
    assert "cs4 ef4 dss4" in render(score, language="english")
    assert "c-sharp4 e-flat4 d-sharpsharp4" in render(score, language="english", prefer_long=True)
    assert "dx4" in render(score, language="english", prefer_x=True)
    assert "ré" in render(score, language="français", prefer_accented=True)
    assert "ré" not in render(score, language="français")


def test_key_signatures():
    sharps = ['c', 'g', 'd', 'a', 'e', 'b', 'fis', 'cis']
    for count, name in enumerate(sharps):
        score = Score([voice("c'", key=KeySignature.from_count(count))])
        assert '  \\key {} \\major\n'.format(name) in render(score)

    with pytest.raises(InvalidKeySignature):
        KeySignature.from_count(8)

    score = Score([voice("c'"), voice("c'", key=KeySignature(1, 0.5))])
    with pytest.raises(InvalidKeySignature) as exc:
        render(score)
    assert exc.value.position() == (1, None, None)


def test_header():
    score = Score(title='Say "hi"', subtitle=Markup("Opus 1", "bold"))
    assert render(score) == (
        '\\version "2.24.0"\n'
        '\n'
        '\\header {\n'
        '  title = "Say \\"hi\\""\n'
        '  subtitle = \\markup \\bold { Opus 1 }\n'
        '}\n')

    with pytest.raises(RenderError):
        render(Score(header={"my title": "x"}))

    # header markup is checked before anything is written
    with pytest.raises(RenderError) as exc:
        render(Score(title=Markup("x", "not valid")))
    assert "title" in str(exc.value)
    with pytest.raises(RenderError):
        Writer().validate(Score(title=Markup("x", "not valid")))


def test_clef_and_name():
    text = render(Score([voice("c", clef="bass_8", name='a "b"')]))
    assert '\\new Voice = "a \\"b\\"" \\relative c {\n' in text
    assert '  \\clef "bass_8"\n' in text


def test_empty():
    assert render(Score()) == '\\version "2.24.0"\n'
    assert render(Score(), allow_empty=True) == '\\version "2.24.0"\n'
    with pytest.raises(EmptyScore):
        render(Score(), allow_empty=False)
    # an empty voice is written as an empty block
    assert render(Score([Voice()])).endswith('\\new Voice \\relative {\n}\n')


def test_errors():
    c = Pitch(0, 0, 0)
    score = Score([voice("c'"), Voice([
        Measure([Note(c)]),
        Measure([Note(c), Rest(), Note(c, Duration(3))]),
    ])])
    with pytest.raises(InvalidDuration) as exc:
        render(score)
    assert exc.value.position() == (1, 1, 2)
    assert "voice 1, measure 1, event 2" in str(exc.value)

    # the first error in order is reported
    score[0][0][0].duration = Duration(5)
    with pytest.raises(InvalidDuration) as exc:
        Writer().validate(score)
    assert exc.value.position() == (0, 0, 0)

    for event in (Note(Pitch(6, 0, 0)), Note(Pitch(0, 0, 0.125)), Chord([])):
        with pytest.raises(InvalidPitch):
            render(Score([Voice([Measure([event])])]))

    with pytest.raises(InvalidDuration):
        render(Score([Voice([Measure([Rest(Duration(4, 2))])])]), max_dots=1)

    with pytest.raises(InvalidPitch):
        render(Score([voice("c'''")]), max_octave=5)
    render(Score([voice("c'''")]), max_octave=6)

    with pytest.raises(InvalidTimeSignature):
        render(Score([voice("c'", time=TimeSignature(3, 5))]))

    with pytest.raises(RenderError):
        render(Score([Voice([Measure([Note(c, markup=Markup("x", "not valid"))])])]))

    with pytest.raises(TypeError):
        render(Score([Voice([Measure(["c4"])])]))


def test_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="lilyscore.writer")
    render(Score([voice("c'")]))
    assert any("rendering score" in record.getMessage() for record in caplog.records)


def test_package():
    assert lilyscore.version_string == "{}.{}.{}".format(*lilyscore.version)
    assert lilyscore.render is render


def body_tokens(text):
    """Return the tokens between the braces of a single voice."""
    return text.split('{\n', 1)[1].rsplit('\n}', 1)[0].split()


def test_duration_round_trip():
    c = Pitch(0, 0, 0)
    durations = [Duration(d, dots) for d in DENOMINATORS for dots in range(5)]
    for measure in (Measure(Rest(d) for d in durations), Measure(Note(c, d) for d in durations)):
        text = render(Score([Voice([measure])]), relative=False)
        assert read_measure(' '.join(body_tokens(text))) == measure


def test_pitch_round_trip():
    all_pitches = [Pitch(octave - 4, note, alter)
        for octave in range(10)
            for note in range(7)
                for alter in (-1, -0.5, 0, 0.5, 1)]
    score = Score([Voice([Measure(Note(p) for p in all_pitches)])])
    for language in ("nederlands", "english"):
        text = render(score, language=language, relative=False)
        assert read_measure(' '.join(body_tokens(text)), language) == score[0][0]

        text = render(score, language=language)
        start = text.split('{\n')[0].split()[-1]
        names = [[token.rstrip('0123456789.')] for token in body_tokens(text)]
        p = PitchProcessor(language)
        assert Rel2abs(p).convert(names, start) == [[pitch] for pitch in all_pitches]


def test_permuted_measure():
    c, d, e, f = pitches("c'", "d'", "e'", "f'")
    def make(events):
        return Score([voice("c' d'", "g a"), Voice([
            Measure([Note(c), Note(d)]),
            Measure(events),
            Measure([Rest(), Note(f)]),
        ])], title="Order")

    events = [Note(c, Duration(8)), Note(d), Rest(Duration(2)), Note(e, Duration(16))]
    original = render(make(events), relative=False).splitlines()
    for permuted in (events[::-1], events[1:] + events[:1], [events[2], events[0], events[3], events[1]]):
        lines = render(make(permuted), relative=False).splitlines()
        assert len(lines) == len(original)
        changed = [i for i, (a, b) in enumerate(zip(original, lines)) if a != b]
        assert len(changed) == 1
        line = lines[changed[0]]
        assert read_measure(line) == Measure(permuted)


def test_version():
    import pathlib
    assert lilyscore.version == (0, 1, 0)
    pyproject = (pathlib.Path(__file__).parent.parent / "pyproject.toml").read_text()
    assert 'version = {attr = "lilyscore.pkginfo.version_string"}' in pyproject

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
Helpers to write strings and markup text.

Free-form text, such as header fields, is written as a quoted LilyPond
string. Text attached to notes is written as a ``\\markup`` expression, where
words that LilyPond can read as markup text are left unquoted::

    >>> from lilyscore.markup import Markup, quote
    >>> quote('Sonata "quasi una fantasia"')
    '"Sonata \\\\"quasi una fantasia\\\\""'
    >>> Markup("molto rit.", "italic").to_string()
    '\\\\markup \\\\italic { molto rit. }'

"""

import re

import parce.lang.lilypond


_RE_MATCH_MARKUP = re.compile(parce.lang.lilypond.RE_LILYPOND_MARKUP_TEXT).fullmatch
_RE_MATCH_COMMAND = re.compile(r"[a-zA-Z]+(?:-[a-zA-Z]+)*").fullmatch


def is_markup(text):
    """Return True if the text can be written as LilyPond markup without quotes."""
    return bool(_RE_MATCH_MARKUP(text))


def quote(text):
    """Return the text as a LilyPond string, with quotes and backslashes escaped."""
    text = re.sub(r'([\\"])', r'\\\1', text)
    return '"{}"'.format(text.replace('\n', '\\n'))


def word(text):
    """Return the text unchanged if it is valid markup text, otherwise quoted."""
    return text if is_markup(text) else quote(text)


class Markup:
    r"""Text to attach to a note or chord.

    The ``text`` is split in words. The ``commands`` are names of markup
    commands without backslash (like ``"bold"`` or ``"italic"``) that are
    applied to the text, outermost first.

    """
    def __init__(self, text, *commands):
        self.text = text
        self.commands = commands

    def __repr__(self):
        return "<{} {!r}{}>".format(type(self).__name__, self.text,
            "".join(" \\" + c for c in self.commands))

    def __eq__(self, other):
        if isinstance(other, Markup):
            return (self.text, self.commands) == (other.text, other.commands)
        return NotImplemented

    def __hash__(self):
        return hash((self.text, self.commands))

    def to_string(self):
        r"""Return the ``\markup`` expression.

        Raises a :obj:`ValueError` if a command name is not a valid markup
        command name.

        """
        for command in self.commands:
            if not _RE_MATCH_COMMAND(command):
                raise ValueError("invalid markup command: {!r}".format(command))
        words = " ".join(map(word, self.text.split())) or '""'
        return " ".join(["\\markup", *("\\" + c for c in self.commands), "{", words, "}"])


def markup(value):
    """Return a :class:`Markup` for value, which may be a Markup or a string."""
    return value if isinstance(value, Markup) else Markup(value)


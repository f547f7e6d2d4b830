"""
    cursor
    ~~~~~~

    The character cursor the scanner reads from. The scanner only relies on
    four capabilities, so any object providing them can stand in for
    ``TemplateCursor``:

        * ``current``: the character under the cursor, or ``EOB`` once the
          buffer is exhausted.
        * ``advance()``: move forward by one character.
        * ``mark()``: remember the current position.
        * ``capture(mark)``: return the ``Span`` of everything read since
          ``mark``.
"""

from collections import namedtuple

from simplerjinja.constants import EOB

Pos = namedtuple('Pos', 'offset lineno col_offset')

START_POS = Pos(offset=0, lineno=1, col_offset=1)

Span = namedtuple('Span', 'raw start end')

def calculate_new_pos(string, pos):
    """Compute a new position after reading past the given string."""

    offset, lineno, col_offset = pos
    offset += len(string)

    if '\n' not in string:
        col_offset += len(string)
    else:
        col_offset = len(string) - string.rindex('\n')
        lineno += string.count('\n')

    return Pos(offset, lineno, col_offset)

def empty_span(pos):
    """A zero-width span sitting at `pos`."""
    return Span('', pos, pos)


class TemplateCursor(object):
    """Walk a template string one character at a time, tracking line and column."""

    def __init__(self, text):
        self.text = text
        self.pos = START_POS

    def __repr__(self):
        return '<TemplateCursor at %d:%d %r>' % (
                self.pos.lineno, self.pos.col_offset, self.current)

    @property
    def current(self):
        offset = self.pos.offset
        if offset >= len(self.text):
            return EOB
        return self.text[offset]

    def advance(self):
        char = self.current
        if char == EOB:
            return
        self.pos = calculate_new_pos(char, self.pos)

    def mark(self):
        return self.pos

    def capture(self, mark):
        """Return the span from `mark` to the current position."""
        assert mark.offset <= self.pos.offset, "Capture from the future?"
        return Span(self.text[mark.offset:self.pos.offset], mark, self.pos)

"""
Lexical units produced by the scanner.

Every token carries the span it was scanned from and can re-serialize itself
with ``canonical_text()``: valid markup for the token's kind, independent of the
exact whitespace that was captured.
"""

from collections import namedtuple

from simplerjinja import constants

Id = namedtuple('Id', 'name span')


class LongId(namedtuple('LongId', 'parts span')):
    """A dotted path such as ``user.address.city``."""

    __slots__ = ()

    def __new__(cls, parts, span):
        parts = tuple(parts)
        if not parts:
            raise ValueError('A dotted path needs at least one part.')
        return super(LongId, cls).__new__(cls, parts, span)

    @property
    def dotted(self):
        return constants.DOT.join(self.parts)


class Token(object):
    """Mixin giving namedtuple tokens kind-aware equality."""

    __slots__ = ()

    # closers end an expression run; they belong to an enclosing construct
    is_closer = False

    def __eq__(self, other):
        return type(self) is type(other) and tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__, tuple(self)))

    def canonical_text(self):
        raise NotImplementedError


class EOF(Token, namedtuple('EOF', 'span')):
    __slots__ = ()
    is_closer = True

    def canonical_text(self):
        return ''


class Raw(Token, namedtuple('Raw', 'text span')):
    __slots__ = ()

    def canonical_text(self):
        return self.text


class InvalidExpr(Token, namedtuple('InvalidExpr', 'raw_text span')):
    """A `{%` tag that could not be read; kept apart from Raw so the intent stays visible."""

    __slots__ = ()

    def canonical_text(self):
        return self.raw_text


class Use(Token, namedtuple('Use', 'path span')):
    __slots__ = ()

    def canonical_text(self):
        return constants.USE_FORMAT % (self.path.dotted,)


class ForStart(Token, namedtuple('ForStart', 'var_name path span')):
    __slots__ = ()

    def canonical_text(self):
        return constants.FOR_FORMAT % (self.var_name.name, self.path.dotted)


class ForEnd(Token, namedtuple('ForEnd', 'span')):
    __slots__ = ()
    is_closer = True

    def canonical_text(self):
        return constants.ENDFOR_TEXT


class If(Token, namedtuple('If', 'path span')):
    __slots__ = ()

    def canonical_text(self):
        return constants.IF_FORMAT % (self.path.dotted,)


class Elif(Token, namedtuple('Elif', 'path span')):
    __slots__ = ()
    is_closer = True

    def canonical_text(self):
        return constants.ELIF_FORMAT % (self.path.dotted,)


class Else(Token, namedtuple('Else', 'span')):
    __slots__ = ()
    is_closer = True

    def canonical_text(self):
        return constants.ELSE_TEXT


class IfEnd(Token, namedtuple('IfEnd', 'span')):
    __slots__ = ()
    is_closer = True

    def canonical_text(self):
        return constants.ENDIF_TEXT

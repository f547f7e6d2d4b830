"""
    scanner
    ~~~~~~~

    Turn a character cursor into a stream of tokens, one token of lookahead at
    a time.

    The scanner is permissive: it never raises on malformed markup. Its
    operation is organized around strategies, objects with an ``.accepts()``
    and a ``.consume()`` method. Once the scanner has read past the ``{`` that
    opens a tag, it asks each strategy in turn whether it accepts the next
    character; the accepting strategy's ``.consume()`` reads the rest of the
    tag and returns a token, or None when the tag turns out to be malformed.
    What a malformed tag degrades to depends on the strategy:

        * ``{{ ... }}`` that fails to scan becomes literal ``Raw`` text.
        * ``{% ... %}`` that fails to scan becomes an ``InvalidExpr``, so the
          intent to write a tag is not lost.

    Terminology:
        * Strategy: as above.
        * SuperStrategy: a strategy that reads a little (e.g. the keyword
          after ``{%``) and then delegates to a sub-strategy.

    The main entry point is ``TemplateScanner``.
"""

import functools
import logging

from simplerjinja import constants
from simplerjinja import tokens
from simplerjinja.constants import EOB

log = logging.getLogger(__name__)


def traced(func):
    """Log entry into and the result of a scanner sub-reader at DEBUG level,
    indented by how deeply the readers are nested.
    """

    @functools.wraps(func)
    def wrapper(self, *args):
        if not log.isEnabledFor(logging.DEBUG):
            return func(self, *args)

        prefix = '  ' * self.trace_depth
        log.debug('%s[%s] at %r', prefix, func.__name__, self.cursor)
        self.trace_depth += 1
        try:
            result = func(self, *args)
        finally:
            self.trace_depth -= 1
        log.debug('%s=> %s', prefix, repr(result).replace('\n', ' ')[:60])
        return result

    return wrapper


def get_accepting_strategy(string, strategies):
    """Return the strategy that accepts the given string, or None."""
    for strat in strategies:
        if strat.accepts(string):
            return strat
    return None


# =============================================
#  Strategies for the keyword after ``{%``
# =============================================

class ForStrategy(object):
    """Read the rest of ``{% for x in a.b %}``."""

    def accepts(self, keyword):
        return keyword == constants.KEYWORD_FOR

    def consume(self, scanner, start):
        scanner.skip_whitespace()
        var_name = scanner.read_id()
        if var_name is None:
            return None

        scanner.skip_whitespace()
        if scanner.read_keyword() != constants.KEYWORD_IN:
            return None

        scanner.skip_whitespace()
        path = scanner.read_long_id()
        if path is None:
            return None

        if not scanner.read_statement_close():
            return None

        return tokens.ForStart(var_name, path, scanner.cursor.capture(start))

class ConditionStrategy(object):
    """Read the rest of ``{% if a.b %}`` or ``{% elif a.b %}``."""

    def __init__(self, keyword, token_class):
        self.keyword = keyword
        self.token_class = token_class

    def accepts(self, keyword):
        return keyword == self.keyword

    def consume(self, scanner, start):
        scanner.skip_whitespace()
        path = scanner.read_long_id()
        if path is None:
            return None

        if not scanner.read_statement_close():
            return None

        return self.token_class(path, scanner.cursor.capture(start))

class BareTagStrategy(object):
    """Read the rest of a tag that takes no arguments, like ``{% endfor %}``."""

    def __init__(self, keyword, token_class):
        self.keyword = keyword
        self.token_class = token_class

    def accepts(self, keyword):
        return keyword == self.keyword

    def consume(self, scanner, start):
        if not scanner.read_statement_close():
            return None
        return self.token_class(scanner.cursor.capture(start))

class StrayKeywordStrategy(object):
    """``in`` only means something inside a for header."""

    def accepts(self, keyword):
        return keyword == constants.KEYWORD_IN

    def consume(self, scanner, start):
        return None


# ==========================================
#  Strategies for the character after ``{``
# ==========================================

class InterpolationStrategy(object):
    """Read the rest of ``{{ a.b }}``; degrade to Raw on failure."""

    def accepts(self, char):
        return char == constants.OPEN_BRACE

    def consume(self, scanner, start):
        cursor = scanner.cursor
        cursor.advance()

        scanner.skip_whitespace()
        path = scanner.read_long_id()
        if path is None:
            return scanner.read_raw(start)

        scanner.skip_whitespace()
        for _ in range(2):
            if cursor.current != constants.CLOSE_BRACE:
                return scanner.read_raw(start)
            cursor.advance()

        return tokens.Use(path, cursor.capture(start))

class StatementSuperStrategy(object):
    """Read the keyword after ``{%`` and delegate; degrade to InvalidExpr on failure."""

    sub_strategies = (
            ForStrategy(),
            BareTagStrategy(constants.KEYWORD_ENDFOR, tokens.ForEnd),
            ConditionStrategy(constants.KEYWORD_IF, tokens.If),
            ConditionStrategy(constants.KEYWORD_ELIF, tokens.Elif),
            BareTagStrategy(constants.KEYWORD_ELSE, tokens.Else),
            BareTagStrategy(constants.KEYWORD_ENDIF, tokens.IfEnd),
            StrayKeywordStrategy(),
    )

    def accepts(self, char):
        return char == constants.PERCENT

    def consume(self, scanner, start):
        scanner.cursor.advance()
        scanner.skip_whitespace()

        keyword = scanner.read_keyword()
        strat = get_accepting_strategy(keyword, self.sub_strategies)
        token = strat.consume(scanner, start) if strat is not None else None
        if token is None:
            return scanner.invalid_expr(start)
        return token


class TemplateScanner(object):
    """Single-token-lookahead lexer over a character cursor.

    ``current`` always holds the next unconsumed token; ``advance()`` replaces
    it with the following one. EOF is terminal.
    """

    tag_strategies = (InterpolationStrategy(), StatementSuperStrategy())

    def __init__(self, cursor):
        self.cursor = cursor
        self.trace_depth = 0
        self.current = self.read_token()

    def advance(self):
        if isinstance(self.current, tokens.EOF):
            return
        self.current = self.read_token()

    def scan_tokens(self):
        """Consume and return every remaining token, EOF included."""
        result = [self.current]
        while not isinstance(self.current, tokens.EOF):
            self.advance()
            result.append(self.current)
        return result

    @traced
    def read_token(self):
        cursor = self.cursor
        start = cursor.mark()

        if cursor.current == EOB:
            return tokens.EOF(cursor.capture(start))

        if cursor.current != constants.OPEN_BRACE:
            return self.read_raw(start)

        cursor.advance()
        strat = get_accepting_strategy(cursor.current, self.tag_strategies)
        if strat is None:
            # a lone `{`; literal text
            return self.read_raw(start)
        return strat.consume(self, start)

    @traced
    def read_raw(self, start):
        """Extend a Raw token from `start` up to the next `{` or the end."""
        cursor = self.cursor
        while cursor.current != constants.OPEN_BRACE and cursor.current != EOB:
            cursor.advance()
        span = cursor.capture(start)
        return tokens.Raw(span.raw, span)

    @traced
    def invalid_expr(self, start):
        span = self.cursor.capture(start)
        return tokens.InvalidExpr(span.raw, span)

    def skip_whitespace(self):
        cursor = self.cursor
        while cursor.current != EOB and cursor.current.isspace():
            cursor.advance()

    @traced
    def read_keyword(self):
        """Read a run of letters; return it if it is a keyword, else None."""
        cursor = self.cursor
        start = cursor.mark()
        while cursor.current != EOB and cursor.current.isalpha():
            cursor.advance()
        word = cursor.capture(start).raw
        if word in constants.KEYWORDS:
            return word
        return None

    @traced
    def read_id(self):
        cursor = self.cursor
        start = cursor.mark()

        if not cursor.current.isidentifier():
            return None
        cursor.advance()

        while cursor.current != EOB and ('_' + cursor.current).isidentifier():
            cursor.advance()

        span = cursor.capture(start)
        return tokens.Id(span.raw, span)

    @traced
    def read_long_id(self):
        """Read ``id ('.' id)*`` greedily; None when not even one id is there."""
        cursor = self.cursor
        start = cursor.mark()

        parts = []
        while True:
            ident = self.read_id()
            if ident is None:
                break
            parts.append(ident.name)
            if cursor.current != constants.DOT:
                break
            cursor.advance()

        if not parts:
            return None
        return tokens.LongId(parts, cursor.capture(start))

    def read_statement_close(self):
        """Skip whitespace and read ``%}``."""
        cursor = self.cursor
        self.skip_whitespace()
        for char in (constants.PERCENT, constants.CLOSE_BRACE):
            if cursor.current != char:
                return False
            cursor.advance()
        return True

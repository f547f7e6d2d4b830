#!/usr/bin/python

import logging

import testify
from testify import setup, teardown
from testify.assertions import assert_equal, assert_in

from simplerjinja import tokens
from simplerjinja.cursor import Pos, TemplateCursor
from simplerjinja.engine import tokenize
from simplerjinja.scanner import TemplateScanner

def kinds(text):
    """(token class name, captured text) for every token before EOF."""
    return [(type(token).__name__, token.span.raw) for token in tokenize(text)[:-1]]

class InterpolationTest(testify.TestCase):

    def test_text_and_use(self):
        assert_equal(kinds('Hello {{ name }}!'), [
                ('Raw', 'Hello '),
                ('Use', '{{ name }}'),
                ('Raw', '!'),
        ])

    def test_dotted_path(self):
        use = tokenize('{{ user.email }}')[0]
        assert_equal(use.path.parts, ('user', 'email'))
        assert_equal(use.path.dotted, 'user.email')

    def test_whitespace_is_optional(self):
        use = tokenize('{{user}}')[0]
        assert_equal(type(use), tokens.Use)
        assert_equal(use.canonical_text(), '{{ user }}')

    def test_malformed_use_degrades_to_raw(self):
        """A broken {{ }} is literal text up to the next brace."""
        assert_equal(kinds('{{ 1 }} tail{{ x }}'), [
                ('Raw', '{{ 1 }} tail'),
                ('Use', '{{ x }}'),
        ])

    def test_unclosed_use_degrades_to_raw(self):
        for text in ('{{ x }', '{{ x', '{{', '{{ x } }'):
            assert_equal(kinds(text), [('Raw', text)])

    def test_doubled_braces(self):
        assert_equal(kinds('{{{{ x }}'), [('Raw', '{{'), ('Use', '{{ x }}')])

    def test_lone_brace(self):
        assert_equal(kinds('a{b'), [('Raw', 'a'), ('Raw', '{b')])
        assert_equal(kinds('{'), [('Raw', '{')])


class StatementTest(testify.TestCase):

    def test_misspelled_keyword_is_invalid(self):
        assert_equal(kinds('{% fr x in y %}'), [
                ('InvalidExpr', '{% fr'),
                ('Raw', ' x in y %}'),
        ])

    def test_missing_keyword_is_invalid(self):
        assert_equal(kinds('{%%}'), [('InvalidExpr', '{%'), ('Raw', '%}')])

    def test_bare_in_is_invalid(self):
        assert_equal(kinds('{% in %}'), [('InvalidExpr', '{% in'), ('Raw', ' %}')])

    def test_for_start(self):
        token = tokenize('{% for x in items %}')[0]
        assert_equal(type(token), tokens.ForStart)
        assert_equal(token.var_name.name, 'x')
        assert_equal(token.path.parts, ('items',))

    def test_for_start_canonical_text(self):
        token = tokenize('{%for   x   in a.b%}')[0]
        assert_equal(type(token), tokens.ForStart)
        assert_equal(token.span.raw, '{%for   x   in a.b%}')
        assert_equal(token.canonical_text(), '{% for x in a.b %}')

    def test_malformed_for_headers_are_invalid(self):
        """Interpolations degrade to Raw, but statements stay marked as invalid."""
        assert_equal(kinds('{% for x on items %}'), [('InvalidExpr', '{% for x on'), ('Raw', ' items %}')])
        assert_equal(kinds('{% for 1 in items %}'), [('InvalidExpr', '{% for '), ('Raw', '1 in items %}')])
        assert_equal(kinds('{% for x in %}'), [('InvalidExpr', '{% for x in '), ('Raw', '%}')])
        assert_equal(kinds('{% for x in items }'), [('InvalidExpr', '{% for x in items '), ('Raw', '}')])
        assert_equal(kinds('{% for x in items %'), [('InvalidExpr', '{% for x in items %')])

    def test_endfor(self):
        assert_equal(kinds('{% endfor %}{%endfor%}'), [('ForEnd', '{% endfor %}'), ('ForEnd', '{%endfor%}')])
        assert_equal(kinds('{% endfor x %}'), [('InvalidExpr', '{% endfor '), ('Raw', 'x %}')])

    def test_conditional_tags(self):
        assert_equal(kinds('{% if a %}{% elif b.c %}{% else %}{% endif %}'), [
                ('If', '{% if a %}'),
                ('Elif', '{% elif b.c %}'),
                ('Else', '{% else %}'),
                ('IfEnd', '{% endif %}'),
        ])

    def test_malformed_conditional_tags_are_invalid(self):
        assert_equal(kinds('{% if %}'), [('InvalidExpr', '{% if '), ('Raw', '%}')])
        assert_equal(kinds('{% else x %}'), [('InvalidExpr', '{% else '), ('Raw', 'x %}')])
        assert_equal(kinds('{% elsewhere %}'), [('InvalidExpr', '{% elsewhere'), ('Raw', ' %}')])


class ScannerStateTest(testify.TestCase):

    def test_eof_is_terminal(self):
        scanner = TemplateScanner(TemplateCursor('ab'))
        assert_equal(type(scanner.current), tokens.Raw)
        scanner.advance()
        eof = scanner.current
        assert_equal(type(eof), tokens.EOF)
        assert_equal(eof.span.raw, '')
        assert_equal(eof.span.start, Pos(2, 1, 3))
        scanner.advance()
        assert_equal(scanner.current, eof)

    def test_scan_tokens_ends_with_eof(self):
        scanned = tokenize('')
        assert_equal(len(scanned), 1)
        assert_equal(type(scanned[0]), tokens.EOF)

    def test_spans_track_lines(self):
        use = tokenize('a\n{{ b }}')[1]
        assert_equal(use.span.start, Pos(2, 2, 1))
        assert_equal(use.span.end, Pos(9, 2, 8))

    def test_token_kinds_never_compare_equal(self):
        eof, = tokenize('')
        assert_equal(eof == tokens.ForEnd(eof.span), False)
        assert_equal(eof == tokens.EOF(eof.span), True)


class ListHandler(logging.Handler):

    def __init__(self):
        super(ListHandler, self).__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


class TracingTest(testify.TestCase):

    @setup
    def enable_tracing(self):
        self.logger = logging.getLogger('simplerjinja.scanner')
        self.old_level = self.logger.level
        self.handler = ListHandler()
        self.logger.addHandler(self.handler)
        self.logger.setLevel(logging.DEBUG)

    @teardown
    def disable_tracing(self):
        self.logger.removeHandler(self.handler)
        self.logger.setLevel(self.old_level)

    def test_tracing_does_not_change_tokens(self):
        text = 'x {{ a.b }} {% for i in c %}{% endfor %} {% fr %}'
        self.logger.setLevel(logging.WARNING)
        quiet = tokenize(text)
        self.logger.setLevel(logging.DEBUG)
        assert_equal(tokenize(text), quiet)

    def test_readers_are_traced(self):
        tokenize('{{ a }}')
        trace = '\n'.join(self.handler.messages)
        assert_in('[read_token]', trace)
        assert_in('  [read_long_id]', trace)

if __name__ == '__main__':
    testify.run()

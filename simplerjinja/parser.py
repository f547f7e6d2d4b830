"""
Recursive-descent parser from a token stream to an immutable AST.

The parser never gives up on a template. Tokens it can't place become
UnexpectedToken nodes, and a for or if construct that doesn't close properly
is flattened back into its parts instead of being dropped.
"""

import logging

from simplerjinja import nodes
from simplerjinja import tokens
from simplerjinja.constants import EngineSettings
from simplerjinja.cursor import empty_span

log = logging.getLogger(__name__)

OPENERS = (tokens.ForStart, tokens.If)
LEAVES = {
        tokens.Raw: nodes.Raw,
        tokens.InvalidExpr: nodes.InvalidExpr,
        tokens.Use: nodes.Use,
}


class TemplateParser(object):

    def __init__(self, scanner, settings=EngineSettings):
        self.scanner = scanner
        self.settings = settings
        self.depth = 0

    def parse(self):
        """Read the whole token stream into one expression."""
        result = []
        while not isinstance(self.scanner.current, tokens.EOF):
            result.extend(self.read_expr_run())
            current = self.scanner.current
            if not isinstance(current, tokens.EOF):
                # a closer with nothing open to close
                log.debug('Unexpected %r', current)
                result.append(nodes.UnexpectedToken(current))
                self.scanner.advance()

        if not result:
            return nodes.empty(self.scanner.current.span)
        return nodes.concat(result)

    def read_expr_run(self):
        """Read expressions up to, but not including, the next closer."""
        result = []
        while True:
            current = self.scanner.current
            if current.is_closer:
                return result

            if isinstance(current, OPENERS):
                if self.depth >= self.settings.max_nesting_depth:
                    result.extend(self.read_too_deep())
                elif isinstance(current, tokens.ForStart):
                    result.extend(self.read_for())
                else:
                    result.extend(self.read_if())
                continue

            result.append(LEAVES[type(current)](current))
            self.scanner.advance()

    def read_body(self):
        self.depth += 1
        try:
            body = self.read_expr_run()
        finally:
            self.depth -= 1
        return body

    def read_for(self):
        """Read a for block. Returns a list of nodes: the For node, or the
        flattened pieces of a loop that wasn't closed by ``{% endfor %}``.
        """
        opener = self.scanner.current
        self.scanner.advance()

        body = self.read_body()

        closer = self.scanner.current
        self.scanner.advance()

        if not isinstance(closer, tokens.ForEnd):
            log.debug('For loop at %r closed by %r', opener.span.start, closer)
            return [nodes.UnexpectedToken(opener)] + body + [nodes.UnexpectedToken(closer)]

        return [nodes.For(opener.var_name, opener.path, opener, closer, _as_expr(body, opener))]

    def read_if(self):
        """Read an if block with its elif/else branches; flattened like
        read_for() when it isn't closed by ``{% endif %}``.
        """
        opener = self.scanner.current
        self.scanner.advance()

        body = self.read_body()
        branches = [nodes.Branch(opener, _as_expr(body, opener))]
        else_branch = None
        flattened = [nodes.UnexpectedToken(opener)] + body

        while True:
            current = self.scanner.current
            if else_branch is None and isinstance(current, (tokens.Elif, tokens.Else)):
                self.scanner.advance()
                body = self.read_body()
                branch = nodes.Branch(current, _as_expr(body, current))
                if isinstance(current, tokens.Else):
                    else_branch = branch
                else:
                    branches.append(branch)
                flattened.append(nodes.UnexpectedToken(current))
                flattened.extend(body)
                continue

            self.scanner.advance()
            if isinstance(current, tokens.IfEnd):
                return [nodes.If(tuple(branches), else_branch, current)]

            log.debug('If block at %r closed by %r', opener.span.start, current)
            flattened.append(nodes.UnexpectedToken(current))
            return flattened

    def read_too_deep(self):
        """Flatten a construct nested past the depth limit without recursing.

        Consumes tokens until the opener's closers balance out (or EOF); tags
        become UnexpectedToken nodes and everything else stays a leaf.
        """
        opener = self.scanner.current
        log.warning('Template nesting exceeds %d levels at line %d; not parsing %r',
                self.settings.max_nesting_depth, opener.span.start.lineno, opener.canonical_text())

        result = []
        balance = 0
        while True:
            current = self.scanner.current
            if isinstance(current, tokens.EOF):
                return result

            self.scanner.advance()
            if type(current) in LEAVES:
                result.append(LEAVES[type(current)](current))
                continue

            result.append(nodes.UnexpectedToken(current))
            if isinstance(current, OPENERS):
                balance += 1
            elif isinstance(current, (tokens.ForEnd, tokens.IfEnd)):
                balance -= 1
                if balance == 0:
                    return result


def _as_expr(body, opener):
    """The body of a construct as one expression; empty bodies sit just past the opener."""
    if not body:
        return nodes.empty(empty_span(opener.span.end))
    return nodes.concat(body)

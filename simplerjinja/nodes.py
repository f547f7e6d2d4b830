"""
AST nodes built by the parser.

Nodes are immutable; the partial evaluator builds new trees rather than
rewriting old ones. ``shape()`` describes a tree with the spans left out, which
is what "structurally equal" means for two parses of different text.
"""

from collections import namedtuple

from simplerjinja import tokens


class EmptyConcatError(ValueError):
    """concat() needs at least one expression."""
    pass


class Expr(object):
    __slots__ = ()

    def __eq__(self, other):
        return type(self) is type(other) and tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__, tuple(self)))

    def is_free(self):
        """True when nothing in this subtree needs a context to evaluate."""
        raise NotImplementedError

    def shape(self):
        raise NotImplementedError


class Raw(Expr, namedtuple('Raw', 'token')):
    __slots__ = ()

    def is_free(self):
        return True

    def shape(self):
        return ('Raw', self.token.text)


class InvalidExpr(Expr, namedtuple('InvalidExpr', 'token')):
    __slots__ = ()

    def is_free(self):
        return True

    def shape(self):
        return ('InvalidExpr', self.token.raw_text)


class Use(Expr, namedtuple('Use', 'token')):
    __slots__ = ()

    @property
    def path(self):
        return self.token.path

    def is_free(self):
        return False

    def shape(self):
        return ('Use', self.path.parts)


class For(Expr, namedtuple('For', 'var_name path open_token close_token body')):
    __slots__ = ()

    def is_free(self):
        return False

    def shape(self):
        return ('For', self.var_name.name, self.path.parts, self.body.shape())


# `token` is the If, Elif or Else tag that opens the branch
Branch = namedtuple('Branch', 'token body')


class If(Expr, namedtuple('If', 'branches else_branch close_token')):
    """``{% if %}`` with any number of ``{% elif %}`` and an optional ``{% else %}``."""

    __slots__ = ()

    def is_free(self):
        return False

    def shape(self):
        branches = tuple((branch.token.path.parts, branch.body.shape()) for branch in self.branches)
        else_shape = self.else_branch.body.shape() if self.else_branch is not None else None
        return ('If', branches, else_shape)

    def from_branch(self, index):
        """Return the conditional that remains once the first `index` branches
        are known to be false. The new first branch is re-tagged as an ``if``.
        """
        if index == 0:
            return self
        first = self.branches[index]
        opener = tokens.If(first.token.path, first.token.span)
        branches = (Branch(opener, first.body),) + tuple(self.branches[index + 1:])
        return If(branches, self.else_branch, self.close_token)

    def tags(self):
        """Every tag of the construct in source order, closer included."""
        result = [branch.token for branch in self.branches]
        if self.else_branch is not None:
            result.append(self.else_branch.token)
        result.append(self.close_token)
        return result


class UnexpectedToken(Expr, namedtuple('UnexpectedToken', 'token')):
    """A token that showed up where the parser couldn't use it."""

    __slots__ = ()

    def is_free(self):
        return True

    def shape(self):
        return ('UnexpectedToken', type(self.token).__name__, self.token.canonical_text())


class Concat(Expr, namedtuple('Concat', 'children')):
    __slots__ = ()

    def __new__(cls, children):
        return super(Concat, cls).__new__(cls, tuple(children))

    def is_free(self):
        return all(child.is_free() for child in self.children)

    def shape(self):
        return ('Concat',) + tuple(child.shape() for child in self.children)


def concat(exprs):
    """Collapse a single expression to itself, wrap several in a Concat."""
    exprs = list(exprs)
    if not exprs:
        raise EmptyConcatError('concat() of no expressions')
    if len(exprs) == 1:
        return exprs[0]
    return Concat(exprs)

def empty(span):
    """An expression that renders as nothing, anchored at `span`."""
    return Raw(tokens.Raw('', span))

"""
Partial substitution: evaluate what a context can decide and keep the rest.

The result is a residual AST. Variables that resolve to strings are baked in
as Raw nodes, loops over known lists and maps are unrolled, and conditionals
with known conditions are reduced to the chosen branch. Anything that can't
be decided yet is returned unchanged, ready for a later pass with more
bindings. Unlike the renderer, an undecidable loop or conditional is NOT
expanded around a single pass over its body: it stays as it is.
"""

from simplerjinja import nodes
from simplerjinja import tokens
from simplerjinja import values
from simplerjinja.astutil.node_visitor import NodeVisitor


class Substituter(NodeVisitor):

    def visit_Raw(self, node, context):
        return node

    visit_InvalidExpr = visit_Raw
    visit_UnexpectedToken = visit_Raw

    def visit_Concat(self, node, context):
        return nodes.Concat(self.visit(child, context) for child in node.children)

    def visit_Use(self, node, context):
        value = values.resolve(context, node.path.parts)
        if isinstance(value, values.StringValue):
            return nodes.Raw(tokens.Raw(value.text, node.token.span))
        return node

    def visit_For(self, node, context):
        target = values.resolve(context, node.path.parts)
        items = values.loop_items(target)
        if items is None:
            return node

        name = node.var_name.name
        return nodes.Concat(self.visit(node.body, values.bind(context, name, item)) for item in items)

    def visit_If(self, node, context):
        for index, branch in enumerate(node.branches):
            condition = values.resolve(context, branch.token.path.parts)
            if condition is None:
                return node.from_branch(index)
            if values.is_truthy(condition):
                return self.visit(branch.body, context)

        if node.else_branch is not None:
            return self.visit(node.else_branch.body, context)
        return nodes.Concat(())


SUBSTITUTER = Substituter()

def partial_render(expr, context):
    """Substitute what `context` (a MapValue) can resolve in `expr`; return the residual AST."""
    return SUBSTITUTER.visit(expr, context)

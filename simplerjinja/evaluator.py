"""
Full substitution: evaluate an AST against a context and produce text.

Nothing here raises on missing data. A variable that doesn't resolve to a
string is written back out as its ``{{ path }}`` tag, and a loop or conditional
that can't be decided is written back out as its tags around a single pass
over its bodies, so the output can be fed through the engine again.
"""

from simplerjinja import values
from simplerjinja.astutil.node_visitor import NodeVisitor


class Renderer(NodeVisitor):

    def visit_Raw(self, node, context):
        return node.token.canonical_text()

    visit_InvalidExpr = visit_Raw
    visit_UnexpectedToken = visit_Raw

    def visit_Concat(self, node, context):
        return ''.join(self.visit(child, context) for child in node.children)

    def visit_Use(self, node, context):
        value = values.resolve(context, node.path.parts)
        if isinstance(value, values.StringValue):
            return value.text
        # missing, or a map/list that can't be interpolated
        return node.token.canonical_text()

    def visit_For(self, node, context):
        target = values.resolve(context, node.path.parts)
        items = values.loop_items(target)
        if items is None:
            return ''.join([
                node.open_token.canonical_text(),
                self.visit(node.body, context),
                node.close_token.canonical_text(),
            ])

        name = node.var_name.name
        return ''.join(self.visit(node.body, values.bind(context, name, item)) for item in items)

    def visit_If(self, node, context):
        for index, branch in enumerate(node.branches):
            condition = values.resolve(context, branch.token.path.parts)
            if condition is None:
                return self.render_undecided(node.from_branch(index), context)
            if values.is_truthy(condition):
                return self.visit(branch.body, context)

        if node.else_branch is not None:
            return self.visit(node.else_branch.body, context)
        return ''

    def render_undecided(self, node, context):
        """Write out a conditional whose first condition is unresolved: every
        tag, with each body evaluated once under the unchanged context.
        """
        bodies = [branch.body for branch in node.branches]
        if node.else_branch is not None:
            bodies.append(node.else_branch.body)

        result = []
        for tag, body in zip(node.tags(), bodies):
            result.append(tag.canonical_text())
            result.append(self.visit(body, context))
        result.append(node.close_token.canonical_text())
        return ''.join(result)


RENDERER = Renderer()

def render(expr, context):
    """Render `expr` under the MapValue `context`."""
    return RENDERER.visit(expr, context)

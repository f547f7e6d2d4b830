class NodeVisitor(object):
    """
    Class-name dispatch over template AST nodes, in the manner of ast.NodeVisitor.
    Every visit_ method is passed the context the node is evaluated under, so a
    visitor keeps no per-call state of its own and one instance can serve any
    number of evaluations.
    """

    def visit(self, node, context):
        """Visit a node."""
        method = 'visit_' + node.__class__.__name__
        visitor = getattr(self, method, self.generic_visit)
        return visitor(node, context)

    def generic_visit(self, node, context):
        """Called if no explicit visitor function exists for a node."""
        raise NotImplementedError('Evaluation for type %r not implemented.' % (type(node),))

"""
Entry points for the template engine.

The main entry points here are parse, render and partial_render::

    expr = parse('Hello {{ name }}!')
    render(expr, {'name': 'World'})          # 'Hello World!'
    partial_render(expr, {})                 # the same tree; nothing to resolve

Contexts may be given as MapValues or as plain Python data (str, dicts,
lists and tuples), which is converted with values.to_value().
"""

import logging

from simplerjinja import evaluator
from simplerjinja import partial
from simplerjinja import values
from simplerjinja.constants import EngineSettings
from simplerjinja.cursor import TemplateCursor
from simplerjinja.parser import TemplateParser
from simplerjinja.scanner import TemplateScanner

log = logging.getLogger(__name__)

def tokenize(text):
    """Return every token in `text`, ending with EOF."""
    return TemplateScanner(TemplateCursor(text)).scan_tokens()

def parse(text, settings=EngineSettings):
    """Build the AST for a template."""
    scanner = TemplateScanner(TemplateCursor(text))
    expr = TemplateParser(scanner, settings).parse()
    log.debug('Parsed %d characters of template into %s', len(text), type(expr).__name__)
    return expr

def render(expr, context=None):
    """Full substitution: return the text of `expr` under `context`."""
    return evaluator.render(expr, values.as_context(context))

def partial_render(expr, context=None):
    """Residual substitution: return a new AST with what `context` knows baked in."""
    residual = partial.partial_render(expr, values.as_context(context))
    log.debug('Partial render of %s left %s', type(expr).__name__, type(residual).__name__)
    return residual

def render_text(text, context=None, settings=EngineSettings):
    """Convenience for render(parse(text), context)."""
    return render(parse(text, settings), context)

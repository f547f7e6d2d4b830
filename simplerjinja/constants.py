"""
Magic words and characters shared between engine components; knobs and switches.
"""

# what the cursor reports once the buffer is exhausted
EOB = ''

OPEN_BRACE = '{'
CLOSE_BRACE = '}'
PERCENT = '%'
DOT = '.'

# statement keywords; anything else after `{%` is an invalid expression
KEYWORD_FOR = 'for'
KEYWORD_IN = 'in'
KEYWORD_ENDFOR = 'endfor'
KEYWORD_IF = 'if'
KEYWORD_ELIF = 'elif'
KEYWORD_ELSE = 'else'
KEYWORD_ENDIF = 'endif'

KEYWORDS = frozenset([
        KEYWORD_FOR, KEYWORD_IN, KEYWORD_ENDFOR,
        KEYWORD_IF, KEYWORD_ELIF, KEYWORD_ELSE, KEYWORD_ENDIF,
])

# canonical re-serialization of each tag kind
USE_FORMAT = '{{ %s }}'
FOR_FORMAT = '{%% for %s in %s %%}'
ENDFOR_TEXT = '{% endfor %}'
IF_FORMAT = '{%% if %s %%}'
ELIF_FORMAT = '{%% elif %s %%}'
ELSE_TEXT = '{% else %}'
ENDIF_TEXT = '{% endif %}'

# field names of the record a for loop binds when iterating over a map
ENTRY_KEY = 'key'
ENTRY_VALUE = 'value'


class EngineSettings(object):
    """Holds all the switches and the knobs to control parsing."""

    # openers nested deeper than this are not parsed into For/If nodes;
    # the construct is flattened into a run of UnexpectedToken and leaf nodes
    # instead, which keeps recursion in the parser and evaluators bounded
    # for untrusted templates
    max_nesting_depth = 64

#!/usr/bin/python

import testify
from testify.assertions import assert_equal

from tools.tests.test_case import TemplateTestCase

NAMES = ['one', 'two', 'three', 'four', 'five']

def make_bag(names):
    result = {}
    for i, name in enumerate(names):
        result[name] = name * (i+1)
    return result

display = {}
display['bags'] = [make_bag(NAMES[:2]), make_bag(NAMES[2:3])]

class BagsTestCase(TemplateTestCase):
    """Nested loops: a list of maps, each map iterated as key/value records."""

    target_template = 'bags'
    num_stress_test_iterations = 10

    def get_display(self):
        return display

    def test(self):
        super(BagsTestCase, self).test()
        assert_equal(self.result.split('\n'), [
                '<ul><li>one: one</li><li>two: twotwo</li></ul>',
                '<ul><li>three: three</li></ul>',
                '',
        ])

if __name__ == '__main__':
    testify.run()

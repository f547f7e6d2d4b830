#!/usr/bin/python

import testify
from testify.assertions import assert_equal

from tools.tests.test_case import TemplateTestCase

display = {'name': 'World'}

class SimpleTestCase(TemplateTestCase):

    target_template = 'simple'

    def get_display(self):
        return display

    def test(self):
        super(SimpleTestCase, self).test()
        assert_equal(self.result, 'Hello World!\n')

if __name__ == '__main__':
    testify.run()

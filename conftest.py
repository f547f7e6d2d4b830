"""Run the testify test cases under tools/tests with pytest.

Each testify TestCase method becomes one pytest item, executed through
testify's own TestCase.run() so that @setup/@teardown fixtures apply.
"""

import importlib
import inspect

import pytest
from testify.test_case import MetaTestCase

TESTS_DIR = 'tools/tests'


def pytest_pycollect_makemodule(module_path, parent):
    rel = module_path.relative_to(parent.config.rootpath)
    if rel.parent.as_posix() == TESTS_DIR:
        return TestifyModule.from_parent(parent, path=module_path)
    return None


class TestifyModule(pytest.File):

    def collect(self):
        rel = self.path.relative_to(self.config.rootpath).with_suffix('')
        mod = importlib.import_module('.'.join(rel.parts))
        # same selection rules as testify.test_discovery
        for _, cls in inspect.getmembers(mod, inspect.isclass):
            if cls.__module__ != mod.__name__:
                continue
            if not cls.__dict__.get('__test__', True):
                continue
            if isinstance(cls, MetaTestCase):
                yield TestifyClass.from_parent(self, name=cls.__name__, testify_cls=cls)


class TestifyClass(pytest.Collector):

    def __init__(self, testify_cls, **kwargs):
        super().__init__(**kwargs)
        self.cls = testify_cls

    def collect(self):
        for method in self.cls().runnable_test_methods():
            yield TestifyItem.from_parent(self, name=method.__name__, testify_cls=self.cls)


class TestifyFailure(Exception):
    pass


class TestifyItem(pytest.Item):

    def __init__(self, testify_cls, **kwargs):
        super().__init__(**kwargs)
        self.cls = testify_cls

    def runtest(self):
        case = self.cls(name_overrides=[self.name])
        case.run()
        failures = [r for r in case.results() if not r.success]
        if failures:
            raise TestifyFailure('\n'.join(r.format_exception_info() for r in failures))

    def repr_failure(self, excinfo):
        if isinstance(excinfo.value, TestifyFailure):
            return str(excinfo.value)
        return super().repr_failure(excinfo)

    def reportinfo(self):
        return self.path, None, '%s.%s' % (self.cls.__name__, self.name)

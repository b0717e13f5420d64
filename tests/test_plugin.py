"""Integration tests for suite collection and execution by pytest."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pytest import MonkeyPatch, Pytester

TEST_ACCOUNT_MODULE = '''
from pytest_should import context, describe, eql, expect, it, before


class Account:
    def __init__(self, balance):
        self.balance = balance


@describe('User Account')
def user_account():

    @before
    def create(world):
        world.account = Account(100)

    @it('is valid when active')
    def _(world):
        expect(world.account.balance).should() == 100
        expect(world.account.balance).should(eql(100))

    @context('when closed')
    def when_closed():

        @before
        def close(world):
            world.account.balance = 0

        @it('fails loudly')
        def _(world):
            expect(world.account.balance).should(eql(0.0))
'''

TEST_AFTER_HOOK_MODULE = '''
from pytest_should import after, describe, it


@describe('Cleanup')
def cleanup():

    @after
    def explode():
        raise RuntimeError('after hook ran')

    @it('runs')
    def _():
        pass
'''

TEST_SHADOWING_MODULE = '''
from pytest_should import describe, it


@describe('Shadowing')
def shadowing():
    it('works', lambda: None)
    it('works', lambda: None)
'''

TEST_PREDICATE_MODULE = '''
from pytest_should import describe, expect, it, predicate


@describe('Widget')
def widget():

    @it('checks')
    def _():
        expect(42).should(predicate('empty'))
'''

TEST_CALL_FORM_MODULE = '''
from pytest_should import describe, expect, it


def body():
    it('works', lambda: expect(1).should() == 1)


suite = describe('Call form', body)
'''


def test_collect_and_run(pytester: 'Pytester') -> None:
    """Collect nested suites and report assertion counts."""
    pytester.makepyfile(test_account=TEST_ACCOUNT_MODULE)

    result = pytester.runpytest('-v')

    result.assert_outcomes(passed=1, failed=1)
    result.stdout.fnmatch_lines([
        '*test_account.py::UserAccount::test_is_valid_when_active PASSED*',
        '*test_account.py::UserAccount::WhenClosed::test_fails_loudly FAILED*',
        '*Expected 0 to eql 0.0*',
        '*2 test units, 3 assertions*',
    ])


def test_collect_only(pytester: 'Pytester') -> None:
    """Expose suites as collectors and units as items."""
    pytester.makepyfile(test_account=TEST_ACCOUNT_MODULE)

    result = pytester.runpytest('--collect-only', '-q')

    result.stdout.fnmatch_lines([
        'test_account.py::UserAccount::test_is_valid_when_active',
        'test_account.py::UserAccount::WhenClosed::test_fails_loudly',
    ])


def test_call_form(pytester: 'Pytester') -> None:
    """Collect root suites assigned to module attributes."""
    pytester.makepyfile(test_call=TEST_CALL_FORM_MODULE)

    result = pytester.runpytest('-v')

    result.assert_outcomes(passed=1)
    result.stdout.fnmatch_lines(['*test_call.py::CallForm::test_works PASSED*'])


def test_after_hooks_own(pytester: 'Pytester') -> None:
    """Run the suite's own after hooks by default."""
    pytester.makepyfile(test_cleanup=TEST_AFTER_HOOK_MODULE)

    result = pytester.runpytest()

    result.assert_outcomes(failed=1)
    result.stdout.fnmatch_lines(['*RuntimeError: after hook ran*'])


def test_after_hooks_parent_option(pytester: 'Pytester') -> None:
    """Skip root suite after hooks in parent mode."""
    pytester.makepyfile(test_cleanup=TEST_AFTER_HOOK_MODULE)

    result = pytester.runpytest('--should-after-hooks=parent')

    result.assert_outcomes(passed=1)


def test_after_hooks_parent_environment(pytester: 'Pytester', monkeypatch: 'MonkeyPatch') -> None:
    """Read the after hooks mode from the environment."""
    monkeypatch.setenv('PYTEST_SHOULD_AFTER_HOOKS', 'parent')
    pytester.makepyfile(test_cleanup=TEST_AFTER_HOOK_MODULE)

    result = pytester.runpytest()

    result.assert_outcomes(passed=1)


def test_shadowing_warning(pytester: 'Pytester') -> None:
    """Warn about colliding names and keep the last unit."""
    pytester.makepyfile(test_shadowing=TEST_SHADOWING_MODULE)

    result = pytester.runpytest('-W', 'always::pytest_should.errors.ShadowingWarning')

    result.assert_outcomes(passed=1)


def test_shadowing_strict(pytester: 'Pytester') -> None:
    """Fail collection on colliding names in strict mode."""
    pytester.makepyfile(test_shadowing=TEST_SHADOWING_MODULE)

    result = pytester.runpytest('--should-strict')

    result.assert_outcomes(errors=1)
    result.stdout.fnmatch_lines(["*Unit 'test_works' is shadowing an existing*"])


def test_predicate_error_report(pytester: 'Pytester') -> None:
    """Report matcher runtime errors with their location."""
    pytester.makepyfile(test_widget=TEST_PREDICATE_MODULE)

    result = pytester.runpytest()

    result.assert_outcomes(failed=1)
    result.stdout.fnmatch_lines([
        "*'int' object does not support predicate 'empty'*",
        '*in "Widget", unit "test_checks"*',
    ])


def test_builder_restored(pytester: 'Pytester') -> None:
    """Restore the outer session's builder after a nested session."""
    from pytest_should.suite import get_builder  # noqa: PLC0415

    outer = get_builder()
    pytester.makepyfile(test_account=TEST_ACCOUNT_MODULE)

    pytester.runpytest()

    assert get_builder() is outer

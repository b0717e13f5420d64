"""Tests for matcher variants and matcher constructors."""

from typing import TYPE_CHECKING, Any

import pytest
from pydantic import ValidationError

from pytest_should import matchers
from pytest_should.engine import tally
from pytest_should.errors import ShouldRuntimeError, UnknownMatcherError, UnsupportedPredicateError
from pytest_should.matchers import (
    ChangeMatcher,
    DefaultEqualMatcher,
    DefaultNotEqualMatcher,
    PredicateMatcher,
    be_a,
    be_false,
    be_none,
    be_true,
    change,
    eql,
    include,
    predicate,
    raise_error,
    running,
)

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


class Account:
    """Subject with predicates in the usual Python spellings."""

    def __init__(self, active: bool, roles: tuple[str, ...] = ()) -> None:
        self.active = active
        self.roles = roles

    def is_active(self) -> bool:
        return self.active

    @property
    def is_admin(self) -> bool:
        return 'admin' in self.roles

    def has_role(self, role: str) -> bool:
        return role in self.roles


class Counter:
    """Mutable value observed by change matchers."""

    def __init__(self, value: int = 0) -> None:
        self.value = value

    def increment(self) -> None:
        self.value += 1


@pytest.mark.parametrize('subject, expected, result', (
    pytest.param(1, 1, True, id='same int'),
    pytest.param(1, 1.0, False, id='int and float'),
    pytest.param(True, 1, False, id='bool and int'),
    pytest.param('a', 'a', True, id='same str'),
    pytest.param('a', 'b', False, id='different str'),
    pytest.param([1, 2], [1, 2], True, id='equal lists'),
    pytest.param([1, 2], (1, 2), False, id='list and tuple'),
    pytest.param(None, None, True, id='none'),
    pytest.param([1.0], [1], False, id='list of int and float'),
    pytest.param([[1, 2]], [[1, 2]], True, id='equal nested lists'),
    pytest.param([[1, 2.0]], [[1, 2]], False, id='nested list of int and float'),
    pytest.param({'a': 1}, {'a': True}, False, id='dict of bool and int'),
    pytest.param({1.0: 'a'}, {1: 'a'}, False, id='dict keys of int and float'),
    pytest.param({'a': [1]}, {'a': [1]}, True, id='equal nested dicts'),
    pytest.param((1.0, 2), (1, 2), False, id='tuple of int and float'),
    pytest.param({1.0}, {1}, False, id='set of int and float'),
    pytest.param({1, 2}, {2, 1}, True, id='equal sets'),
))
def test_eql(subject: Any, expected: Any, result: bool) -> None:
    """Compare type and value without coercion."""
    assert eql(expected).matches(subject) is result


@pytest.mark.parametrize('matcher, subject, result', (
    pytest.param(predicate('active'), Account(active=True), True, id='is_ method'),
    pytest.param(predicate('active'), Account(active=False), False, id='is_ method false'),
    pytest.param(predicate('Active'), Account(active=True), True, id='fragment lower cased'),
    pytest.param(predicate('admin'), Account(active=True, roles=('admin',)), True, id='property'),
    pytest.param(predicate('has_role', 'admin'), Account(active=True, roles=('admin',)), True, id='has_ prefix'),
    pytest.param(predicate('has_role', role='dev'), Account(active=True), False, id='keyword argument'),
    pytest.param(predicate('digit'), '42', True, id='stdlib spelling'),
    pytest.param(predicate('digit'), '4x', False, id='stdlib spelling false'),
    pytest.param(be_a('kind_of', int), True, True, id='kind of'),
    pytest.param(be_a('instance_of', int), True, False, id='instance of'),
    pytest.param(matchers.be_active(), Account(active=True), True, id='convention'),
    pytest.param(matchers.be_an_instance_of(str), 'x', True, id='convention with article'),
    pytest.param(matchers.be_a_kind_of(str), 1, False, id='convention kind of'),
))
def test_predicate(matcher: PredicateMatcher, subject: Any, result: bool) -> None:
    """Call predicates found by naming convention."""
    assert matcher.matches(subject) is result


def test_convention_builds_predicate() -> None:
    """Resolve `be_<name>` into a predicate matcher factory."""
    factory = matchers.be_an_instance_of

    assert factory.__name__ == 'be_an_instance_of'
    assert factory(str) == predicate('instance_of', str)


def test_convention_import() -> None:
    """Allow importing convention matchers by name."""
    from pytest_should.matchers import be_empty  # noqa: PLC0415

    assert be_empty().predicate == 'empty'


def test_unsupported_predicate() -> None:
    """Fail loudly when the subject lacks the predicate."""
    with pytest.raises(UnsupportedPredicateError, match=r'does not support predicate .missing.'):
        predicate('missing').matches(Account(active=True))


def test_arguments_to_property() -> None:
    """Reject arguments for a predicate that is not callable."""
    with pytest.raises(ShouldRuntimeError, match=r'is not callable'):
        predicate('admin', 'extra').matches(Account(active=True))


@pytest.mark.parametrize('name', (
    'frobnicate',
    'eqaul',
    'be_',
))
def test_unknown_matcher(name: str) -> None:
    """Fail loudly for names that are not matchers."""
    with pytest.raises(UnknownMatcherError, match=r'Unknown matcher'):
        getattr(matchers, name)

    assert not hasattr(matchers, name)


def test_raise_error() -> None:
    """Pass deferred actions raising the expected kind."""
    assert raise_error(ValueError).matches(running(lambda: int('x'))) is True


@pytest.mark.parametrize('action', (
    pytest.param(lambda: None, id='nothing raised'),
    pytest.param(lambda: {}['key'], id='other kind'),
))
def test_raise_error_fails(action: Any) -> None:
    """Fail deferred actions raising nothing or another kind."""
    with pytest.raises(AssertionError):
        raise_error(ValueError).matches(action)


def test_raise_error_counts() -> None:
    """Record the engine assertion made while running the action."""
    with tally.session() as session:
        raise_error(ZeroDivisionError).matches(lambda: 1 / 0)

    assert session.count == 1


@pytest.mark.parametrize('initial, baseline, result', (
    pytest.param(0, 1, True, id='value after action equals baseline'),
    pytest.param(1, 2, True, id='value before action is ignored'),
    pytest.param(0, 0, False, id='value after action differs'),
))
def test_change(initial: int, baseline: int, result: bool) -> None:
    """Compare the value produced after the action with the baseline."""
    counter = Counter(initial)

    matcher = change(lambda: counter.value).from_(baseline)

    assert matcher.matches(counter.increment) is result
    assert counter.value == initial + 1


def test_change_from_is_lazy(mocker: 'MockerFixture') -> None:
    """Neither build nor refine calls the producer."""
    producer = mocker.Mock(return_value=3)
    action = mocker.Mock()

    matcher = change(producer)
    refined = matcher.from_(3)

    producer.assert_not_called()
    assert matcher.baseline is None
    assert isinstance(refined, ChangeMatcher)
    assert refined.baseline == 3

    assert refined.matches(action) is True
    action.assert_called_once_with()
    producer.assert_called_once_with()


@pytest.mark.parametrize('matcher, subject, result', (
    pytest.param(be_true(), True, True, id='true'),
    pytest.param(be_true(), 1, False, id='true and one'),
    pytest.param(be_false(), False, True, id='false'),
    pytest.param(be_false(), 0, False, id='false and zero'),
    pytest.param(be_none(), None, True, id='none'),
    pytest.param(be_none(), [], False, id='none and empty list'),
    pytest.param(matchers.be_nil(), None, True, id='nil'),
    pytest.param(matchers.be_nil(), False, False, id='nil and false'),
))
def test_literals(matcher: Any, subject: Any, result: bool) -> None:
    """Match singletons by identity."""
    assert matcher.matches(subject) is result


@pytest.mark.parametrize('pattern, subject, result', (
    pytest.param('wor', 'hello world', True, id='substring'),
    pytest.param(r'^\d+$', '42', True, id='regex'),
    pytest.param(r'^\d+$', '42a', False, id='regex mismatch'),
    pytest.param('42', 42, False, id='not a string'),
))
def test_include(pattern: str, subject: Any, result: bool) -> None:
    """Search regular expressions in strings."""
    assert include(pattern).matches(subject) is result


def test_include_invalid_pattern() -> None:
    """Reject invalid regular expressions when building the matcher."""
    with pytest.raises(ValidationError):
        include('(')


def test_default_matchers() -> None:
    """Route comparisons of implicit matchers to the engine."""
    with tally.session() as session:
        assert (DefaultEqualMatcher(expected=1) == 1) is True
        assert (DefaultEqualMatcher(expected=1) != 2) is True
        assert (DefaultNotEqualMatcher(expected=1) == 2) is True
        assert (DefaultNotEqualMatcher(expected=1) != 1) is True

    assert session.count == 4

    with pytest.raises(AssertionError):
        DefaultEqualMatcher(expected=1) == 2  # noqa: B015

    with pytest.raises(AssertionError):
        DefaultNotEqualMatcher(expected=1) == 1  # noqa: B015


def test_matchers_are_frozen() -> None:
    """Forbid changing matchers after creation."""
    matcher = eql(1)

    with pytest.raises(ValidationError):
        matcher.expected = 2  # type: ignore[misc]


@pytest.mark.parametrize('matcher, text', (
    pytest.param(eql([1]), 'eql [1]', id='eql'),
    pytest.param(predicate('has_role', 'admin', strict=True), "be has_role('admin', strict=True)", id='predicate'),
    pytest.param(raise_error((KeyError, ValueError)), 'raise KeyError or ValueError', id='raise'),
    pytest.param(change(int).from_(0), 'change value from 0', id='change'),
    pytest.param(be_none(), 'be None', id='literal'),
    pytest.param(include('x'), "include 'x'", id='include'),
))
def test_describe(matcher: Any, text: str) -> None:
    """Describe matchers for failure messages."""
    assert matcher.describe() == text

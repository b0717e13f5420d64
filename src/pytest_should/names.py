"""Identifier rules for suites and test units.

Suites and units are declared with free-text descriptions. This module
turns those descriptions into identifiers that pytest reports as node
names.
"""

from re import ASCII
from re import compile as regexp

#: Characters kept in suite names; everything else is stripped.
SUITE_UNSAFE_PATTERN = regexp(r'[^a-zA-Z0-9 ]')

#: First word character of the description and of each following word.
SUITE_WORD_PATTERN = regexp(r'(?:^| )(\w)')

#: Runs of non-word characters in unit names.
UNIT_SEPARATOR_PATTERN = regexp(r'\W+', flags=ASCII)

#: Prefix pytest uses to recognize test functions.
UNIT_PREFIX = 'test_'


def classify(description: str) -> str:
    """Build a suite name from a free-text description.

    Characters other than ASCII letters, digits, and spaces are dropped,
    the first letter of every word is upper-cased, and the words are
    concatenated.

    Args:
        description: Suite description, for example `"User Account"`.

    Returns:
        Suite identifier, for example `"UserAccount"`.
    """
    description = SUITE_UNSAFE_PATTERN.sub('', description)

    return SUITE_WORD_PATTERN.sub(lambda found: found.group(1).upper(), description)


def methodize(name: str) -> str:
    """Build a test unit name from a free-text description.

    Args:
        name: Unit description, for example `"is valid when active"`.

    Returns:
        Unit identifier, for example `"test_is_valid_when_active"`.
    """
    return UNIT_PREFIX + UNIT_SEPARATOR_PATTERN.sub('_', name.lower())

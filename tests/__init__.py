"""Test suite for the pytest-should package.

This package contains unit and integration tests validating matchers,
expectations, suite construction, hook inheritance, assertion counting,
and the pytest integration of DSL suites.
"""

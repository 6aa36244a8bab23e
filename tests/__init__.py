"""
ABA Insights Test Suite

This package contains unit tests and fixtures for the ABA Insights
dashboard.

Run tests with:
    pytest tests/
    pytest tests/test_filtering.py -v
    pytest tests/test_aggregation.py::TestMonthlyCumulative -v
"""

__version__ = "1.0.0"

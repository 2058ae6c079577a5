"""Paycheck calculator tests."""

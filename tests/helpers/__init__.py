"""
Test helpers for the DynamoDB adapter.

Entity models with table metadata shared by the unit tests.
"""

"""
Integration tests for the shift notification pipeline.

These tests use mocked AWS services to run the retriever, worker and
notification functions end to end.
"""

"""
Standin CLI.

The ``standin`` command inspects fixture data without writing a test:

Usage:
    standin fixtures fixtures/
    standin fixtures fixtures/users.yaml --dump
    standin get fixtures/ /contacts/1 --id 1
"""

__cli_name__ = "standin"

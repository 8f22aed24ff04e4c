"""Integration tests for publishing mkdocs projects.

These tests run the whole local side (mkdocs.yml, the tree builder and the
docs context) against the publisher, with an in-memory page store standing
in for Confluence.
"""

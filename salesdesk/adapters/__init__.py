"""Adapter package for external I/O implementations.

Purpose:
    Concrete implementations of the domain ports: a JSON file store used by
    default and a REST client for a remote sales API.

Dependencies:
    ``requests`` for the REST adapters; filesystem APIs for ``StorageLocal``.

Call context:
    Built by ``salesdesk.app.controller.AppController`` from settings, and by
    tests that exercise persistence directly.
"""

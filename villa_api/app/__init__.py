"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules.  The in‑memory store and error taxonomy live in ``core``,
request and response models in ``schemas``, validation and mutation
rules in ``services`` and the HTTP routes in ``api/v1/endpoints``.
"""

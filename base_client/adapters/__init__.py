"""Adapter package for external I/O implementations.

Purpose:
    Collect the response executor, the concrete transport implementations
    (``requests`` and an offline fake) and error-body helpers.

Dependencies:
    Individual submodules depend on ``requests``, ``pydantic`` and the domain
    protocol definitions.
"""

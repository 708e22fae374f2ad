"""
Generators — produce Dockerfile build steps from mixin configuration.

Each generator module exposes an ``assemble()`` function returning the
ordered instructions, and a ``generate_*()`` wrapper returning a
``GeneratedFile``.
"""

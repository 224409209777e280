"""Core site generation: path mapping, link rewriting, rendering and output.

Modules here never exit the process; fatal problems raise BuildError
subclasses and recoverable ones are returned as diagnostics.
"""

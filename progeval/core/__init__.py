"""
progeval.core
=============

Shared building blocks: typed names, the error taxonomy, immutable result
value objects, configuration and the read-only `Dataset` wrapper.
"""

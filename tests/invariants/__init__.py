"""
Brand kit invariant tests.

Properties that must hold for every kit the engine produces, checked over a
spread of inputs rather than single examples.
"""

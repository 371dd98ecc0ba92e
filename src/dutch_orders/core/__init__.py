"""
Core domain models, chain configuration and wire codecs.

Everything here is pure in-memory computation: no network, no persistence.
"""

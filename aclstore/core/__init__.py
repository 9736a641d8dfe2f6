"""
Core infrastructure: configuration, logging, exceptions and the server factory.
"""

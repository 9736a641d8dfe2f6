"""
Command line interface for the ACL store.
"""

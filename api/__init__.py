"""
API package for Parity.
"""

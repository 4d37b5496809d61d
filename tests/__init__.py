"""
Agreement audit test suite.
"""

"""
NumPy-backed implementations of the KeyEvo domain contracts.
"""

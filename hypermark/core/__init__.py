"""
Core infrastructure for Hypermark: exceptions, logging and paths.
"""

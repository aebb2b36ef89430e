"""
Command-line entry points for tap tempo.
"""

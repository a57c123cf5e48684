"""
Core infrastructure: systems, configuration, events, logging and errors.
"""

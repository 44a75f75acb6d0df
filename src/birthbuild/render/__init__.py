"""
HTML rendering for generated sites.
"""

"""
Web interface for the financing engine.
"""

"""
API route modules for QSL Card Manager.
"""

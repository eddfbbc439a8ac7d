"""
HTTP API for QSL Card Manager.
"""

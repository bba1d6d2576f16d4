"""
Walker module - uploads and records every file below a directory.
"""

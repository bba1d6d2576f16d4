"""
Files module - persisted records of uploaded objects.
"""

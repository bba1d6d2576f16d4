"""
Storage module - uploads local files to an S3-compatible bucket.
"""

"""
Shared configuration, logging and database setup.
"""

"""
Configuration, storage and business logic for the job tracker.
"""

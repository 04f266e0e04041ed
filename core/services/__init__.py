"""
Business rules layered over the storage helpers: ownership, validation,
plan limits and the resume guard.
"""

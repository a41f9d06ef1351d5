"""
Services Module
-------------
Business rules for bootcamps, reviews and accounts: ownership checks,
the one-bootcamp-per-publisher rule, radius search and photo uploads.
"""

"""
Data Models Module
----------------
Contains Pydantic models for data validation and serialization.
Defines the editable fields of bootcamps, reviews and accounts with their
constraints, plus the Actor carried by every authenticated request.
"""

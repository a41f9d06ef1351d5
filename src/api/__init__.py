"""
API Module
---------
Provides RESTful API endpoints for the bootcamp directory using FastAPI.
Features include:
- Bootcamp CRUD with an owner-or-admin policy on every change
- Radius search of bootcamps around a postal code
- Bootcamp photo uploads
- Reviews nested under bootcamps
- Admin-only account management
"""

"""
Geocoding Module
--------------
Handles forward geocoding of postal codes and addresses to geographic coordinates.
Uses OpenStreetMap's Nominatim API with an in-process cache.
"""

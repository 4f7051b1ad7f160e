"""
Civic Reports - citizen issue reporting for municipalities
"""

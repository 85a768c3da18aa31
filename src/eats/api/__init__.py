"""
HTTP application for the Eats backend
"""

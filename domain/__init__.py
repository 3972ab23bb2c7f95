"""
Domain package - enums, ORM models and pydantic schemas for meal planning.
"""

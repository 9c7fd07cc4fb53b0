"""Pydantic Schemas — wire-shape documentation for the API boundary."""

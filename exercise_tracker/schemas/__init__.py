"""
Exercise Tracker — API Schemas
================================

Pydantic models defining the JSON contract. They are separate from the ORM
models so the wire shape (`_id`, human-readable dates, omitted internal
columns) can differ from the table layout.
"""

"""Domain layer: entity shapes, status enums and route table.

Domain modules should not depend on UI or on the HTTP clients.
"""

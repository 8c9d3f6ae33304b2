"""Schema generation for jsonmodel models.

Derives JSON Schema documents (and the function-calling envelope) from
model declarations.
"""

from jsonmodel.core.schema.generator import SchemaGenerator

__all__ = ["SchemaGenerator"]

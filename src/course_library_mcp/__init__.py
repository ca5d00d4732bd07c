"""
Course Library MCP Server Package.

An MCP server for a library of authors and the courses they teach, with
client-driven data shaping, sorting by public field names, paging and
HATEOAS links.

Key Components:
- shaping: property mapping registry, field checks and the data shaper
- models: Pydantic models for data validation and serialization
- database: SQLAlchemy models, sessions and repositories
- config: Configuration management with Pydantic v2
- resources: MCP resources (read-only endpoints)
- tools: MCP tools (queries and operations with side effects)
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]

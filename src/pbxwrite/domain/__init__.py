"""Domain layer — project object records and the project aggregate.

This layer depends only on stdlib, pydantic, and the encoding contract.
No type here formats text; every record describes itself to the
serializer instead.
"""

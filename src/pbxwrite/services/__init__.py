"""Service layer — operations over projects returning ServiceResult.

Services may import from domain, encoding, and config.
"""

"""Data-access services, one module per entity.

Each function takes a `SupabaseClient`, issues one or more PostgREST queries
and raises `ApiError` on failure. Services avoid UI concerns.
"""

"""Resolver package for the GraphQL schema.

Types, queries and mutations import these functions lazily to keep the type
modules free of database imports.
"""

"""Resolver package for GraphQL schema.

Resolvers read the user store from ``info.context["store"]`` and delegate to it.
"""

"""GraphQL schema, types and resolvers for the user API."""

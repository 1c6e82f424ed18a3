"""GraphQL API for the Star Wars character catalogue.

Built with Strawberry on FastAPI. Field resolvers read through request-scoped
batch loaders, connections page through the ordered stores and mutations
write through the mutation gateway.
"""

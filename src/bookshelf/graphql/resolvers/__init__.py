"""Resolver package for the GraphQL schema.

``user`` holds the account resolvers (getUser, createUser, loginUser) and
``book`` the saved-list resolvers (saveBook, deleteBook).
"""

"""
API Package - HTTP layer (routes, dependencies, middleware, error translation)
"""

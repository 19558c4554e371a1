"""
Application layer: configuration, dependency providers and the FastAPI
application factory. Import ``commentsense.app.main`` for the app itself.
"""

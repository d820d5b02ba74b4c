"""
Production ASGI entry point for the Deep backend.

The module builds every repository, service and controller through
AppDependencyBuilder and exposes `asgi_app` with the documentation endpoints
disabled. DATABASE_URL and SUPABASE_JWT_SECRET must be set in the environment.

Example usage:
    uvicorn backend.prod_runner:asgi_app --host 0.0.0.0 --port 8080
"""

from backend.utils.app_dependency_builder import AppDependencyBuilder


builder = AppDependencyBuilder()

asgi_app = builder.fast_app_factory.create_app(is_prod=True)
builder.logger.info("[ProdRunner] Deep API created with documentation disabled")

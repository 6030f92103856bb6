"""Authentication and authorization.

Learn: Bearer JWTs identify accounts. The pipeline is:
1. AuthenticationMiddleware verifies the token (if any) and attaches a
   SecurityContext to the request; failures are logged, never returned
2. enforce_route_gate checks the static route table (401/403)
3. Services re-check ownership against ids resolved from the store
"""

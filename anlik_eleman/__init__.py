"""
Anlık Eleman backend.

Core components:
- remote: HTTP client for the hosted identity/data platform
- db: data access façade returning (data, error) results
- auth: session/profile bootstrap and lazy provisioning
- api: FastAPI surface for the web client
"""

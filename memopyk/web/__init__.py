"""API web FastAPI de MEMOPYK."""

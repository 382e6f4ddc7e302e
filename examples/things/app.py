"""Things — a contract-validated API discovered from the filesystem.

Routes live under ``routes/``: directories form the path and each file
is named after its HTTP verb. Every request is checked against the
route's contract before the handler runs, and every response after.

Run:
    cd examples/things && uvicorn app:app
"""

import logging
from pathlib import Path

from routeguard import ContractRegistry, register_routes
from routeguard.adapters.asgi import ASGIRouter

logging.basicConfig(level=logging.INFO)

registry = ContractRegistry()
register_routes(registry, Path(__file__).parent / "routes")

app = ASGIRouter(registry)

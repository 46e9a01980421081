from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, status
from fastapi.responses import FileResponse, JSONResponse

logger = logging.getLogger(__name__)

API_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def mount_client(app: FastAPI, dist_dir: str | Path) -> bool:
    """Serve the built single-page client, falling back to index.html.

    Must be called after the API routers are included, since the catch-all
    route would otherwise shadow them. Returns False when the build is missing.
    """
    root = Path(dist_dir).resolve()
    index_file = root / "index.html"
    if not index_file.is_file():
        logger.warning("client_dist_missing path=%s", root)
        return False

    @app.api_route("/api", methods=API_METHODS, include_in_schema=False)
    @app.api_route("/api/{api_path:path}", methods=API_METHODS, include_in_schema=False)
    async def api_not_found(api_path: str = ""):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Not found"})

    @app.get("/{full_path:path}", include_in_schema=False)
    async def client_app(full_path: str):
        if full_path:
            candidate = (root / full_path).resolve()
            if candidate.is_file() and candidate.is_relative_to(root):
                return FileResponse(candidate)
        return FileResponse(index_file)

    logger.info("client_dist_mounted path=%s", root)
    return True

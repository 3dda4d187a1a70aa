"""Web routes: the built single-page client, served only when configured."""
from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse


def build_router(static_dir: Path) -> APIRouter:
    """Serve files from static_dir, falling back to index.html for client routes."""
    router = APIRouter(include_in_schema=False)
    root = static_dir.resolve()
    index = root / "index.html"

    @router.get("/{path:path}")
    async def spa(path: str):
        if path == "api" or path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not found")
        candidate = (root / path).resolve()
        if path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        if not index.is_file():
            raise HTTPException(status_code=404, detail="Not found")
        return FileResponse(index)

    return router

"""Serves the built client bundle with single-page-application fallback.

Any ``GET`` that is not an API route and does not name a file inside the
bundle returns ``index.html`` so client-side routing can take over.
"""

from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse, RedirectResponse


def build_client_router(dist_dir: str) -> APIRouter:
    root = Path(dist_dir).resolve()
    index = root / "index.html"
    if not index.is_file():
        raise RuntimeError(
            f"Client bundle not found in {root}; build the client first"
        )

    router = APIRouter(include_in_schema=False)

    @router.get("/{full_path:path}")
    async def serve_client(full_path: str, request: Request):
        if full_path == "api" or full_path.startswith("api/"):
            if full_path.endswith("/") and full_path.rstrip("/") != "api":
                # same redirect FastAPI gives when no bundle is mounted
                target = request.url.replace(path="/" + full_path.rstrip("/"))
                return RedirectResponse(str(target), status_code=307)
            raise HTTPException(status_code=404, detail="Not Found")
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        return FileResponse(index)

    return router

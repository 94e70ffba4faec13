from __future__ import annotations

from starlette.exceptions import HTTPException
from starlette.staticfiles import StaticFiles
from starlette.types import Scope


class SiteStaticFiles(StaticFiles):
    """StaticFiles that refuses dotfiles (.env, .git/...) under the site root."""

    async def get_response(self, path: str, scope: Scope):
        parts = path.replace("\\", "/").split("/")
        if any(part.startswith(".") and part not in (".", "..") for part in parts):
            raise HTTPException(status_code=404)
        return await super().get_response(path, scope)

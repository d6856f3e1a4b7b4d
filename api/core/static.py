"""
Static file mount with directory listing.

Files are served by Starlette's `StaticFiles` (Last-Modified/ETag included).
A GET for a directory returns a plain HTML index of its entries.
"""

from __future__ import annotations

import html
import os
import stat
from urllib.parse import quote

from starlette.responses import HTMLResponse, RedirectResponse, Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope


class ListingStaticFiles(StaticFiles):
    async def get_response(self, path: str, scope: Scope) -> Response:
        if scope["method"] in ("GET", "HEAD"):
            full_path, stat_result = self.lookup_path(path)
            if stat_result is not None and stat.S_ISDIR(stat_result.st_mode):
                request_path = scope["path"]
                if not request_path.endswith("/"):
                    # Relative links in the listing need the trailing slash.
                    last = request_path.rsplit("/", 1)[-1]
                    return RedirectResponse(quote(last) + "/", status_code=307)
                return directory_listing(path, full_path)
        return await super().get_response(path, scope)


def directory_listing(path: str, full_path: str) -> HTMLResponse:
    entries = sorted(os.scandir(full_path), key=lambda e: e.name)
    items = []
    for entry in entries:
        name = entry.name + ("/" if entry.is_dir() else "")
        items.append(f'<li><a href="{quote(name)}">{html.escape(name)}</a></li>')

    shown = "/" if path in ("", ".") else f"/{path.strip('/')}/"
    title = html.escape(f"Index of {shown}")
    body = (
        f"<!doctype html>\n<html><head><title>{title}</title></head>"
        f"<body><h1>{title}</h1><ul>\n" + "\n".join(items) + "\n</ul></body></html>\n"
    )
    return HTMLResponse(body)

"""
upload_portal.py

Purpose: Standalone image upload portal

- GET  /        public upload form (name, email, description, image)
- POST /upload  stores the image and appends its metadata to a log
- GET  /admin   HTTP Basic protected listing of every upload
- GET  /uploads static access to stored images

Metadata is kept in an append-only JSON Lines file, one record per
upload, so concurrent uploads never overwrite each other.

Run:
    ADMIN_USER=admin ADMIN_PASS=... python upload_portal.py
"""

import asyncio
import html
import json
import secrets
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import aiofiles
from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from fastapi.staticfiles import StaticFiles
from pydantic import Field
from pydantic_settings import BaseSettings

from app.core.logging import get_logger, setup_logging
from utils.time_utils import timestamp_ms, utc_now
from utils.validation_utils import sanitize_filename

logger = get_logger("upload_portal")

REALM = "Admin Area"


class PortalSettings(BaseSettings):
    PORTAL_PORT: int = Field(default=3000, description="Port the portal listens on")
    PORTAL_UPLOAD_DIR: str = Field(default="portal_uploads", description="Where images are stored")
    PORTAL_DATA_FILE: str = Field(
        default="portal_data.jsonl",
        description="Append-only metadata log (kept outside the public upload dir)"
    )
    PORTAL_MAX_IMAGE_BYTES: int = Field(default=5 * 1024 * 1024, description="Maximum image size")
    ADMIN_USER: str = Field(default="admin", description="Admin username")
    ADMIN_PASS: str = Field(default="secret123", description="Admin password")

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"
        extra = "ignore"


class MetadataLog:
    """
    Append-only JSON Lines store for upload metadata.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def append(self, record: Dict[str, Any]):
        line = json.dumps(record, ensure_ascii=False) + "\n"
        async with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(self.path, "a", encoding="utf-8") as f:
                await f.write(line)

    async def read_all(self) -> List[Dict[str, Any]]:
        """Returns every record, newest first."""
        if not self.path.exists():
            return []

        records = []
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            async for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append(json.loads(line))
                except json.JSONDecodeError:
                    logger.warning(f"Skipping malformed metadata line in {self.path.name}")

        records.reverse()
        return records


def _page(title: str, body: str, width: int = 700) -> str:
    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <title>{html.escape(title)}</title>
  <style>
    body{{font-family:Arial,Helvetica,sans-serif;max-width:{width}px;margin:40px auto;padding:10px}}
    form{{display:flex;flex-direction:column;gap:8px}}
    label{{font-weight:600}}
    input[type=text],textarea{{padding:8px;border:1px solid #ccc;border-radius:6px}}
    button{{padding:10px;border-radius:6px;border:0;background:#2563eb;color:white;font-weight:600}}
    .note{{font-size:0.9em;color:#555}}
    .item{{border:1px solid #eee;padding:12px;border-radius:8px;margin-bottom:12px;display:flex;gap:12px}}
    .item img{{max-width:160px;max-height:120px;object-fit:cover;border-radius:6px}}
    .meta{{margin-top:8px;font-size:0.85em;color:#666}}
  </style>
</head>
<body>
{body}
</body>
</html>"""


UPLOAD_FORM = _page("Upload (visible to admin only)", """  <h1>Upload</h1>
  <p class="note">Files and details submitted here are visible only to the site administrator.</p>
  <form action="/upload" method="post" enctype="multipart/form-data">
    <label for="name">Name</label>
    <input id="name" name="name" required type="text" placeholder="Your name" />
    <label for="email">Email</label>
    <input id="email" name="email" required type="text" placeholder="you@example.com" />
    <label for="desc">Description / Details</label>
    <textarea id="desc" name="description" rows="4" required></textarea>
    <label for="image">Image (max 5MB)</label>
    <input id="image" name="image" required type="file" accept="image/*" />
    <button type="submit">Upload</button>
  </form>
  <hr />
  <p class="note">Administrators: <a href="/admin">Admin Dashboard</a></p>""")

UPLOAD_DONE = _page("Uploaded", """  <h2>Upload successful</h2>
  <p>Your file has been uploaded and will be visible only to the admin.</p>
  <p><a href="/">Upload another</a></p>""")


def esc(value: Any) -> str:
    return html.escape(str(value or ""))


def render_item(item: Dict[str, Any]) -> str:
    size_kb = round((item.get("size") or 0) / 1024)
    return f"""  <div class="item">
    <img src="/uploads/{quote(str(item.get('filename', '')))}" alt="{esc(item.get('description'))}" />
    <div>
      <div><strong>{esc(item.get('name'))}</strong> ({esc(item.get('email'))})</div>
      <div>{esc(item.get('description'))}</div>
      <div class="meta">Uploaded: {esc(item.get('uploadedAt'))} ({size_kb} KB)</div>
    </div>
  </div>"""


def create_portal_app(config: Optional[PortalSettings] = None) -> FastAPI:
    config = config or PortalSettings()

    upload_dir = Path(config.PORTAL_UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    metadata = MetadataLog(Path(config.PORTAL_DATA_FILE))
    security = HTTPBasic(realm=REALM)

    def require_admin(credentials: HTTPBasicCredentials = Depends(security)) -> str:
        user_ok = secrets.compare_digest(credentials.username.encode(), config.ADMIN_USER.encode())
        pass_ok = secrets.compare_digest(credentials.password.encode(), config.ADMIN_PASS.encode())
        if not (user_ok and pass_ok):
            logger.warning(f"Rejected admin login for '{credentials.username}'")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
                headers={"WWW-Authenticate": f'Basic realm="{REALM}"'},
            )
        return credentials.username

    app = FastAPI(title="Upload Portal", docs_url=None, redoc_url=None)

    @app.get("/", response_class=HTMLResponse)
    async def upload_form():
        return UPLOAD_FORM

    @app.post("/upload", response_class=HTMLResponse)
    async def upload(
        name: str = Form(""),
        email: str = Form(""),
        description: str = Form(""),
        image: Optional[UploadFile] = File(None),
    ):
        if image is None or not image.filename:
            return PlainTextResponse("No file uploaded.", status_code=400)

        content = await image.read(config.PORTAL_MAX_IMAGE_BYTES + 1)
        if len(content) > config.PORTAL_MAX_IMAGE_BYTES:
            return PlainTextResponse("File too large.", status_code=413)

        now = utc_now()
        filename = f"{timestamp_ms(now)}-{uuid.uuid4().hex[:8]}-{sanitize_filename(image.filename)}"
        async with aiofiles.open(upload_dir / filename, "wb") as f:
            await f.write(content)

        record = {
            "id": timestamp_ms(now),
            "name": name,
            "email": email,
            "description": description,
            "filename": filename,
            "originalName": image.filename,
            "mimetype": image.content_type,
            "size": len(content),
            "uploadedAt": now.isoformat().replace("+00:00", "Z"),
        }
        await metadata.append(record)
        logger.info(f"Stored upload {filename} ({len(content)} bytes)")

        return UPLOAD_DONE

    @app.get("/admin", response_class=HTMLResponse)
    async def admin_dashboard(username: str = Depends(require_admin)):
        items = await metadata.read_all()
        rows = "\n".join(render_item(item) for item in items) or "  <p>No uploads yet.</p>"
        body = (
            "  <h1>Admin Dashboard</h1>\n"
            f"  <p><a href=\"/\">Site Upload Page</a> (logged in as {html.escape(username)})</p>\n"
            f"  <section>\n{rows}\n  </section>"
        )
        return _page("Admin - Uploaded Items", body, width=900)

    app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

    return app


if __name__ == "__main__":
    import uvicorn

    setup_logging()
    portal_settings = PortalSettings()
    logger.info(f"Admin user: {portal_settings.ADMIN_USER} (set ADMIN_PASS to change the password)")
    uvicorn.run(create_portal_app(portal_settings), host="0.0.0.0", port=portal_settings.PORTAL_PORT)

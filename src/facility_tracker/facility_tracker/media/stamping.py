"""Date-time stamping and upload of task proof photos."""

from __future__ import annotations

import base64
import io
import logging
from datetime import datetime
from typing import Optional

import requests
from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from ..common.datetime_utils import now_local

logger = logging.getLogger(__name__)

STAMP_FORMAT = "%d %b %Y %I:%M:%S %p"


def to_data_url(raw: bytes, mime: str = "image/jpeg") -> str:
    return f"data:{mime};base64,{base64.b64encode(raw).decode('ascii')}"


def stamp_image(raw: bytes, when: datetime) -> bytes:
    """Overlay ``when`` in the bottom-left corner; returns JPEG bytes."""
    with Image.open(io.BytesIO(raw)) as src:
        img = src.convert("RGB")

    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()
    text = when.strftime(STAMP_FORMAT)
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    pad = 6
    x = pad
    y = img.height - (bottom - top) - 3 * pad
    draw.rectangle((x - pad, y - pad, x + (right - left) + pad, y + (bottom - top) + pad), fill=(0, 0, 0))
    draw.text((x, y), text, fill=(255, 255, 255), font=font)

    out = io.BytesIO()
    img.save(out, format="JPEG", quality=85)
    return out.getvalue()


class ImageStamper:
    def __init__(self, upload_url: Optional[str], *, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self._upload_url = upload_url or ""
        self._timeout = timeout
        self._session = session or requests.Session()

    def stamp_and_upload(self, raw: bytes, *, when: Optional[datetime] = None) -> str:
        """Return a durable URL, or the raw image inline if anything fails."""
        when = when or now_local()
        try:
            stamped = stamp_image(raw, when)
        except (UnidentifiedImageError, OSError) as e:
            logger.warning("Could not stamp photo, keeping raw image: %s", e)
            return to_data_url(raw)

        if not self._upload_url:
            return to_data_url(raw)

        filename = f"task_{when.strftime('%Y%m%d_%H%M%S')}.jpg"
        try:
            response = self._session.post(
                self._upload_url,
                files={"file": (filename, stamped, "image/jpeg")},
                timeout=self._timeout,
            )
            response.raise_for_status()
            url = response.json().get("url")
        except (requests.exceptions.RequestException, ValueError, AttributeError) as e:
            logger.warning("Photo upload to %s failed, keeping raw image: %s", self._upload_url, e)
            return to_data_url(raw)

        if not url:
            logger.warning("Upload to %s returned no URL, keeping raw image", self._upload_url)
            return to_data_url(raw)
        return str(url)

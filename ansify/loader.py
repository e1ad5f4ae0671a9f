#!/usr/bin/env python3
# ansify/loader.py
"""
Image acquisition: local files and http(s) URLs decoded with Pillow.

Anything that goes wrong here is reported as ImageLoadError and the
sampling pipeline is never started.
"""

from __future__ import annotations

import io
import logging
import os
from typing import Optional, Tuple
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from PIL import Image, UnidentifiedImageError

from ansify.config import Config
from ansify.errors import ImageLoadError
from ansify.sampler import PixelBuffer

__all__ = ["ImageLoader", "is_url", "load_image", "load_pixel_buffer"]

log = logging.getLogger(__name__)


def is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


class ImageLoader:
    """Fetches and decodes source images. Owns one HTTP session."""

    def __init__(
        self,
        user_agent: str = "ansify",
        connect_timeout: float = 5.0,
        read_timeout: float = 15.0,
        retries: int = 2,
    ):
        self.timeout: Tuple[float, float] = (connect_timeout, read_timeout)

        # HTTP session with retry
        self.session = requests.Session()
        self.session.headers["User-Agent"] = user_agent
        retry = Retry(
            total=retries,
            connect=retries,
            read=retries,
            backoff_factor=0.3,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    @classmethod
    def from_config(cls, cfg: Config) -> "ImageLoader":
        n = cfg["network"]
        return cls(
            user_agent=n["user_agent"],
            connect_timeout=n["connect_timeout_s"],
            read_timeout=n["read_timeout_s"],
            retries=n["retries"],
        )

    # -------------
    # Fetch logic
    # -------------

    def _fetch(self, url: str) -> bytes:
        try:
            r = self.session.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as exc:
            raise ImageLoadError(url, str(exc)) from exc
        if not r.content:
            raise ImageLoadError(url, "empty response body")
        log.info("Fetched %s (%d bytes)", url, len(r.content))
        return r.content

    def _read(self, path: str) -> bytes:
        try:
            with open(os.path.expanduser(path), "rb") as f:
                return f.read()
        except OSError as exc:
            raise ImageLoadError(path, exc.strerror or str(exc)) from exc

    @staticmethod
    def _decode(source: str, raw: bytes) -> Image.Image:
        try:
            img = Image.open(io.BytesIO(raw))
            img.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
            raise ImageLoadError(source, f"cannot decode image: {exc}") from exc
        if img.width <= 0 or img.height <= 0:
            raise ImageLoadError(source, "image has no pixels")
        # First frame only; animations are not supported.
        return img.convert("RGBA")

    def load_image(self, source: str) -> Image.Image:
        raw = self._fetch(source) if is_url(source) else self._read(source)
        img = self._decode(source, raw)
        log.debug("Decoded %s as %dx%d", source, img.width, img.height)
        return img

    def load_pixel_buffer(self, source: str) -> PixelBuffer:
        return PixelBuffer.from_image(self.load_image(source))

    def close(self) -> None:
        self.session.close()


def load_image(source: str, loader: Optional[ImageLoader] = None) -> Image.Image:
    return (loader or ImageLoader()).load_image(source)


def load_pixel_buffer(source: str, loader: Optional[ImageLoader] = None) -> PixelBuffer:
    return (loader or ImageLoader()).load_pixel_buffer(source)

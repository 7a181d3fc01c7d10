"""Decode scraped image sources and convert them to PNG files."""

from __future__ import annotations

import base64
import binascii
import io
import os
import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urljoin

import requests
from PIL import Image

from coinlogos.errors import DownloadError, ImageConversionError

SVG_DATA_URL = re.compile(r"^data:image/svg\+xml(?P<params>[^,]*),(?P<body>.+)$", re.DOTALL)
BASE64_DATA_URL = re.compile(r"^data:image/(?P<fmt>[a-zA-Z]+);base64,(?P<body>.+)$", re.DOTALL)
ASSET_PREFIXES = ("/assets/", "./assets/", "assets/")
PNG_MODES = {"1", "L", "LA", "P", "RGB", "RGBA", "I"}


@dataclass(frozen=True)
class DecodedImage:
    """Raw image bytes and where they came from."""

    data: bytes
    kind: str
    is_svg: bool


def looks_like_svg(data: bytes) -> bool:
    head = data[:512].lstrip().lower()
    if head.startswith(b"<svg"):
        return True
    return head.startswith(b"<?xml") and b"<svg" in data[:2048].lower()


class ImageCodec:
    """Turn inline SVG, data URLs, remote URLs and site asset paths into PNG files."""

    def __init__(
        self,
        asset_base_url: str = "https://app.lighter.xyz",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.asset_base_url = asset_base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.session = session or requests.Session()

    def save_png(self, source: str, dest: str | Path) -> DecodedImage:
        """Decode ``source`` and write it to ``dest`` as PNG."""
        decoded = self.decode(source)
        png = self.to_png(decoded)
        path = Path(dest)
        path.parent.mkdir(parents=True, exist_ok=True)
        partial = path.with_name(f"{path.name}.part")
        try:
            partial.write_bytes(png)
            os.replace(partial, path)
        except OSError as exc:
            partial.unlink(missing_ok=True)
            raise ImageConversionError(f"cannot write {path}: {exc}") from exc
        return decoded

    def decode(self, source: str) -> DecodedImage:
        text = source.strip()
        if not text:
            raise ImageConversionError("empty image source")
        if text.lower().startswith("<svg"):
            return DecodedImage(text.encode("utf-8"), "svg", True)
        if text.startswith("data:image/svg+xml"):
            return self._decode_svg_data_url(text)
        if text.startswith("data:image/"):
            return self._decode_base64_data_url(text)
        if text.startswith(("http://", "https://")):
            return self._fetch(text, "url")
        if text.startswith(ASSET_PREFIXES):
            return self._fetch(self.resolve_asset_url(text), "asset")
        raise ImageConversionError(f"unsupported image source: {text[:50]}")

    def resolve_asset_url(self, path: str) -> str:
        if path.startswith("./"):
            path = path[2:]
        return urljoin(self.asset_base_url, path)

    def to_png(self, decoded: DecodedImage) -> bytes:
        if decoded.is_svg:
            return self._svg_to_png(decoded.data)
        return self._raster_to_png(decoded.data)

    @staticmethod
    def _decode_svg_data_url(text: str) -> DecodedImage:
        match = SVG_DATA_URL.match(text)
        if match is None:
            raise ImageConversionError("malformed SVG data URL")
        body = match.group("body")
        if "base64" in match.group("params"):
            try:
                data = base64.b64decode(body)
            except (binascii.Error, ValueError) as exc:
                raise ImageConversionError(f"invalid base64 SVG data: {exc}") from exc
        else:
            data = unquote(body).encode("utf-8")
        return DecodedImage(data, "svg-data", True)

    @staticmethod
    def _decode_base64_data_url(text: str) -> DecodedImage:
        match = BASE64_DATA_URL.match(text)
        if match is None:
            raise ImageConversionError("malformed base64 data URL")
        try:
            data = base64.b64decode(match.group("body"))
        except (binascii.Error, ValueError) as exc:
            raise ImageConversionError(f"invalid base64 image data: {exc}") from exc
        return DecodedImage(data, match.group("fmt").lower(), False)

    def _fetch(self, url: str, kind: str) -> DecodedImage:
        try:
            response = self.session.get(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as exc:
            raise DownloadError(url, str(exc)) from exc
        if not 200 <= response.status_code < 300:
            raise DownloadError(url, f"HTTP {response.status_code}")
        data = response.content
        content_type = response.headers.get("content-type", "").lower()
        is_svg = "svg" in content_type or url.lower().split("?")[0].endswith(".svg")
        return DecodedImage(data, kind, is_svg or looks_like_svg(data))

    @staticmethod
    def _svg_to_png(data: bytes) -> bytes:
        try:
            import cairosvg
        except (ImportError, OSError) as exc:
            raise ImageConversionError(
                "CairoSVG is required to rasterize SVG logos. "
                f"Install it and the cairo library with `pip install cairosvg`: {exc}"
            ) from exc
        try:
            png = cairosvg.svg2png(bytestring=data)
        except (ValueError, SyntaxError, OSError, TypeError) as exc:
            raise ImageConversionError(f"cannot rasterize SVG: {exc}") from exc
        if not png:
            raise ImageConversionError("SVG rasterizer returned no data")
        return png

    @staticmethod
    def _raster_to_png(data: bytes) -> bytes:
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                converted = image if image.mode in PNG_MODES else image.convert("RGBA")
                buffer = io.BytesIO()
                converted.save(buffer, format="PNG")
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise ImageConversionError(f"cannot convert image to PNG: {exc}") from exc
        return buffer.getvalue()

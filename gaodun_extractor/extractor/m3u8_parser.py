"""Tools for expanding m3u8 playlists into discrete TS URLs."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional
from urllib.parse import urljoin

from ..utils.http_client import HttpClient

STREAM_INF_TAG = "#EXT-X-STREAM-INF"


class M3U8Parser:
    """Fetches m3u8 manifests and extracts their TS files."""

    def __init__(self, http_client: HttpClient) -> None:
        self._http_client = http_client

    async def expand(self, m3u8_url: str, headers: Optional[Dict[str, str]] = None) -> List[str]:
        text = await self._http_client.fetch_cdn_text_async(m3u8_url, headers)
        entries = parse_playlist(m3u8_url, text)

        if STREAM_INF_TAG in text and entries:
            # Master playlist: the entries are variant playlists, take the first.
            variant_url = entries[0]
            logging.debug("Following variant playlist %s", variant_url)
            text = await self._http_client.fetch_cdn_text_async(variant_url, headers)
            entries = parse_playlist(variant_url, text)

        if not entries:
            logging.warning("m3u8 at %s did not contain TS segments", m3u8_url)
        return entries


def parse_playlist(m3u8_url: str, text: str) -> List[str]:
    """Returns the absolute URLs listed in a playlist body, in order."""

    urls = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        urls.append(urljoin(m3u8_url, line))
    return urls

"""Entry point that turns a course URL into media descriptors."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from ..api.gateway import Gateway
from ..config import ExtractorConfig
from ..models import CourseSchema, ExtractionResult, MediaDescriptor
from ..utils.http_client import HttpClient
from .aggregator import RequestGate
from .classifier import SchemaClassifier
from .locator import extract_course_id
from .m3u8_parser import M3U8Parser
from .resolver import ResourceResolver
from .walker import EpResourceMapper, EpStudyWalker, GStudyWalker


class GaodunExtractor:
    """Classifies a course and walks it with the matching walker.

    Structural problems (no course id, no gradations, a failing first
    gradation request, an expired session) raise. Everything that only
    affects one branch of the tree ends up in ``ExtractionResult.errors``.
    """

    def __init__(
        self,
        gateway: Gateway,
        expander: M3U8Parser,
        config: Optional[ExtractorConfig] = None,
        http_client: Optional[HttpClient] = None,
    ) -> None:
        self._gateway = gateway
        self._expander = expander
        self.config = config or ExtractorConfig()
        self._http_client = http_client
        self._classifier = SchemaClassifier(gateway)

    @classmethod
    def from_config(cls, config: ExtractorConfig) -> "GaodunExtractor":
        http_client = HttpClient(auth_token=config.auth_token, timeout=config.timeout, retries=config.retries)
        return cls(Gateway(http_client), M3U8Parser(http_client), config=config, http_client=http_client)

    async def extract_async(self, url: str) -> ExtractionResult:
        course_id = extract_course_id(url)
        gate = RequestGate(self.config.max_in_flight)
        try:
            schema = await gate.call(self._classifier.classify, course_id, self.config.strict_schema)
            resolver = ResourceResolver(
                self._gateway,
                self._expander,
                gate,
                resolution=self.config.resolution_hint,
                channel=self.config.channel,
            )
            if schema is CourseSchema.GSTUDY:
                walker = GStudyWalker(self._gateway, resolver, gate)
            else:
                walker = EpStudyWalker(self._gateway, EpResourceMapper(resolver), gate)
            result = await walker.walk(course_id)
        finally:
            if self._http_client is not None:
                await self._http_client.aclose()

        logging.info(
            "Course %s: %s descriptor(s), %s branch error(s)",
            course_id,
            len(result.descriptors),
            len(result.errors),
        )
        return result

    def extract_with_errors(self, url: str) -> ExtractionResult:
        return asyncio.run(self.extract_async(url))

    def extract(self, url: str) -> List[MediaDescriptor]:
        return self.extract_with_errors(url).descriptors

    def close(self) -> None:
        if self._http_client is not None:
            self._http_client.close()

    def __enter__(self) -> "GaodunExtractor":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

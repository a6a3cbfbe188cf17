"""Concurrent traversal of the two course layouts."""

from __future__ import annotations

import logging
from typing import List

from ..api.gateway import Gateway
from ..models import CourseSchema, ExtractionResult, Gradation, Resource, Syllabus
from ..utils.file_utils import build_base_directory
from .aggregator import RequestGate, gather_branches
from .resolver import ResourceResolver


def resource_label(resource: Resource) -> str:
    return f"{resource.discriminator or 'resource'} {resource.id} ({resource.title})"


async def resolve_resources(
    resolver: ResourceResolver,
    resources: List[Resource],
    base_dir: str,
) -> ExtractionResult:
    """Resolves every resource of a slot in its own task."""

    return await gather_branches(
        [resolver.resolve(resource, base_dir) for resource in resources],
        [resource_label(resource) for resource in resources],
        "resource",
    )


class GStudyWalker:
    """Walks g-study courses: gradation -> glive syllabus tree -> resource slots."""

    schema = CourseSchema.GSTUDY

    def __init__(self, gateway: Gateway, resolver: ResourceResolver, gate: RequestGate) -> None:
        self._gateway = gateway
        self._resolver = resolver
        self._gate = gate

    async def walk(self, course_id: str) -> ExtractionResult:
        gradations = await self._gate.call(self._gateway.fetch_gradations, course_id, self.schema)
        targets = [gradation for gradation in gradations if gradation.glive_syllabus is not None]
        skipped = len(gradations) - len(targets)
        if skipped:
            logging.debug("Course %s: %s gradation(s) without a glive syllabus skipped", course_id, skipped)

        return await gather_branches(
            [self._walk_gradation(course_id, gradation) for gradation in targets],
            [gradation.name or gradation.syllabus_id for gradation in targets],
            "gradation",
        )

    async def _walk_gradation(self, course_id: str, gradation: Gradation) -> ExtractionResult:
        syllabus = await self._gate.call(
            self._gateway.fetch_syllabus, course_id, gradation.syllabus_id, self.schema
        )
        logging.info("Walking gradation %s (syllabus %s)", gradation.name, gradation.syllabus_id)
        return await self.walk_node(course_id, gradation.name, syllabus)

    async def walk_node(self, course_id: str, gradation_name: str, node: Syllabus) -> ExtractionResult:
        """Collects the descriptors of ``node`` and its whole subtree.

        Children are listed before the node's own resources; within each
        group the source order is kept.
        """

        base_dir = build_base_directory(course_id, gradation_name, node.name)
        slots = [(label, resources) for label, resources in node.resource_slots() if resources]

        children = gather_branches(
            [self.walk_node(course_id, gradation_name, child) for child in node.children],
            [child.name or str(child.id) for child in node.children],
            "subtree",
        )
        own = gather_branches(
            [resolve_resources(self._resolver, resources, base_dir) for _, resources in slots],
            [f"{node.name} {label}" for label, _ in slots],
            "slot",
        )
        return await gather_branches([children, own], ["children", "resources"], "node")


class EpResourceMapper:
    """Resolves an ep-study item flagged as a resource.

    Items carry their media records in the same four slots as glive nodes; an
    item without embedded records yields nothing.
    """

    def __init__(self, resolver: ResourceResolver) -> None:
        self._resolver = resolver

    async def map(self, item: Syllabus, base_dir: str) -> ExtractionResult:
        resources = [resource for _, slot in item.resource_slots() for resource in slot]
        if not resources:
            logging.debug("Ep item %s is flagged as a resource but carries none", item.id)
            return ExtractionResult()
        return await resolve_resources(self._resolver, resources, base_dir)


class EpStudyWalker:
    """Walks ep-study courses: gradation -> item list -> items flagged as resources."""

    schema = CourseSchema.EPSTUDY

    def __init__(self, gateway: Gateway, mapper: EpResourceMapper, gate: RequestGate) -> None:
        self._gateway = gateway
        self._mapper = mapper
        self._gate = gate

    async def walk(self, course_id: str) -> ExtractionResult:
        gradations = await self._gate.call(self._gateway.fetch_gradations, course_id, self.schema)
        targets = [gradation for gradation in gradations if gradation.identity(self.schema)]
        if len(targets) < len(gradations):
            logging.warning("Skipping %s gradation(s) without an id", len(gradations) - len(targets))

        return await gather_branches(
            [self._walk_gradation(course_id, gradation) for gradation in targets],
            [gradation.name or gradation.id for gradation in targets],
            "gradation",
        )

    async def _walk_gradation(self, course_id: str, gradation: Gradation) -> ExtractionResult:
        items = await self._gate.call(self._gateway.fetch_syllabus, course_id, gradation.id, self.schema)
        logging.info("Walking gradation %s (%s items)", gradation.name, len(items))
        return await self.walk_items(course_id, gradation.name, items)

    async def walk_items(self, course_id: str, gradation_name: str, items: List[Syllabus]) -> ExtractionResult:
        return await gather_branches(
            [self._walk_item(course_id, gradation_name, item) for item in items],
            [item.name or str(item.id) for item in items],
            "subtree",
        )

    async def _walk_item(self, course_id: str, gradation_name: str, item: Syllabus) -> ExtractionResult:
        branches = []
        labels = []
        if item.children:
            branches.append(self.walk_items(course_id, gradation_name, item.children))
            labels.append(f"{item.name} children")
        if item.is_resource:
            base_dir = build_base_directory(course_id, gradation_name, item.name)
            branches.append(self._mapper.map(item, base_dir))
            labels.append(f"{item.name} resource")
        return await gather_branches(branches, labels, "item")

"""Shared fixtures for lpgview tests."""

import random

import pytest

from lpgview.core.demo import DEMO_DOCUMENT
from lpgview.graph.emphasis import EmphasisTracker
from lpgview.graph.enrichment import EnrichmentPipeline
from lpgview.graph.view import GraphView
from lpgview.parsing.compiler import compile_document

PARTICLES = """
[electrons]
label = "Electrons"
color = "#111111"
link = "https://en.wikipedia.org/wiki/Electron"

[leptons]
label = "Leptons"
tags = ["particle", "fermion"]

[[relationships]]
source = "electrons"
target = "leptons"
type = "is_a"

[[relationships]]
source = "leptons"
target = "protons"
"""


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def particles_text():
    return PARTICLES


@pytest.fixture
def demo_text():
    return DEMO_DOCUMENT


@pytest.fixture
def particles_graph():
    """Compiled (not enriched) particles document."""
    return compile_document(PARTICLES, rng=random.Random(7))


@pytest.fixture
def demo_graph():
    """Compiled and enriched demo document."""
    graph = compile_document(DEMO_DOCUMENT, rng=random.Random(42))
    return EnrichmentPipeline(seed=42).run(graph)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def demo_view(demo_graph, clock):
    return GraphView(demo_graph, emphasis=EmphasisTracker(duration=1.5, clock=clock))

"""Roadmap generation pipeline using LangGraph.

This package turns a free-text learning request into a structured roadmap:
- Goal extraction: normalize the request into a goal descriptor
- Roadmap generation: build stages, nodes and resources, and detect calendar intent
"""

__version__ = "0.1.0"

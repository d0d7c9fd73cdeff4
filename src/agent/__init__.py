"""Agent module -- LangGraph search pipeline and service facade."""

from src.agent.graph import build_graph
from src.agent.service import ScrapedDocument, WebSearchService
from src.agent.state import SearchState

__all__ = ["build_graph", "ScrapedDocument", "SearchState", "WebSearchService"]

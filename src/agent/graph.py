"""LangGraph state machine wiring.

State flows:

  cache_lookup -> [route_decision]
                        |
              +---------+---------+
              |                   |
            (hit)              (miss)
              |                   |
              |              web_search
              |                   |
              |             assemble_text
              |                   |
              |             store_result
              |                   |
              +----> log_search <-+
                          |
                         END
"""

from langgraph.graph import END, StateGraph

from src.agent.nodes import SearchNodes
from src.agent.state import SearchState


def build_graph(nodes: SearchNodes):
    """Construct and compile the search graph.  Returns a runnable."""
    g = StateGraph(SearchState)

    # -- add nodes ----------------------------------------------------------
    g.add_node("cache_lookup", nodes.cache_lookup_node)
    g.add_node("web_search", nodes.web_search_node)
    g.add_node("assemble_text", nodes.assemble_text_node)
    g.add_node("store_result", nodes.store_result_node)
    g.add_node("log_search", nodes.log_search_node)

    # -- edges --------------------------------------------------------------
    g.set_entry_point("cache_lookup")

    # Conditional: cache hit vs miss
    g.add_conditional_edges(
        "cache_lookup",
        nodes.route_decision,
        {
            "hit": "log_search",
            "miss": "web_search",
        },
    )

    # Cache-miss path
    g.add_edge("web_search", "assemble_text")
    g.add_edge("assemble_text", "store_result")
    g.add_edge("store_result", "log_search")

    # Common tail
    g.add_edge("log_search", END)

    return g.compile()

"""Serper response parsing and HTML paragraph extraction.

Provider responses are untrusted JSON: any field with an unexpected shape is
treated as missing rather than as an error.
"""

from typing import Any, Dict, List

from bs4 import BeautifulSoup

from src.web.search_provider import RawSearchPayload


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_web_response(data: Any, payload: RawSearchPayload, include_images: bool) -> None:
    """Append text bits, links and (optionally) images from a web search response."""
    data = _as_dict(data)

    answer_box = data.get("answerBox")
    if isinstance(answer_box, dict):
        payload.text_bits.append(f"{_text(answer_box.get('title'))} {_text(answer_box.get('answer'))}")

    graph = data.get("knowledgeGraph")
    if isinstance(graph, dict):
        payload.text_bits.append(f"{_text(graph.get('title'))} {_text(graph.get('type'))}")
        for key, value in _as_dict(graph.get("attributes")).items():
            payload.text_bits.append(f"{key}: {value}")

    # Snippets and links stay index-aligned, even for blank snippets.
    for item in _as_list(data.get("organic")):
        payload.text_bits.append(_text(item.get("snippet")))
        payload.links.append(_text(item.get("link")))

    for item in _as_list(data.get("peopleAlsoAsk")):
        payload.text_bits.append(f"{_text(item.get('question'))} {_text(item.get('snippet'))}")
        payload.links.append(_text(item.get("link")))

    if include_images:
        parse_image_response(data, payload)


def parse_image_response(data: Any, payload: RawSearchPayload) -> None:
    """Append image URLs from an image search response."""
    for item in _as_list(_as_dict(data).get("images")):
        url = item.get("imageUrl")
        if url:
            payload.images.append(str(url))


def extract_paragraph_text(html: str) -> str:
    """Return the text of every ``<p>`` element, one paragraph per line."""
    if not html or not html.strip():
        return ""
    soup = BeautifulSoup(html, "html.parser")
    paragraphs = (p.get_text(" ", strip=True) for p in soup.find_all("p"))
    return "\n".join(p for p in paragraphs if p)

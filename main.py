"""CLI entry point for the web search agent."""

import argparse
import asyncio
import sys
from pathlib import Path

from src.agent.service import SCRAPE_OUTPUTS, WebSearchService
from src.llm.conversation import ConversationLLM
from src.security.guardrails import WebSearchError
from src.utils.config import settings
from src.utils.logger import get_logger

log = get_logger(__name__)


async def run_query(service: WebSearchService, query: str, args: argparse.Namespace) -> None:
    """Run a single query through the pipeline and print results."""
    snippets = not args.no_snippets
    if args.no_cache:
        result = await service.perform_search_request(query, use_cache=False)
        output = result.text if snippets else ""
        if args.links and result.links:
            visited = await service.visit_links(query, result.links)
            output += ("\n" if output else "") + visited
    else:
        output = await service.websearch(query, snippets=snippets, links=args.links)

    if not output:
        print("\n(no results)\n")
        return

    if args.ask:
        answer = ConversationLLM().generate_response(query, output)
        print(f"\nAnswer:\n{answer or '(No response generated.)'}\n")
        return

    print(f"\n{output}")


async def run_scrape(service: WebSearchService, query: str, args: argparse.Namespace) -> None:
    docs = await service.scrape(
        query,
        max_results=args.max_results,
        output=args.output,
        snippets=args.snippets_file,
    )
    if not docs:
        print("\nNothing to scrape.\n")
        return

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    for doc in docs:
        # Queries and hostnames may contain path separators.
        name = doc.name.replace("/", "_").replace("\\", "_")
        (out_dir / name).write_text(doc.text, encoding="utf-8")
        print(f"  wrote {out_dir / name}")


async def run_visit(service: WebSearchService, links: list) -> None:
    results = await service.collect_visit_results(links)
    if not results:
        print("\n(no pages could be read)\n")
        return
    for r in results:
        print(f"---\n{r.link}\n\n{r.text}\n")


async def interactive_mode(service: WebSearchService, args: argparse.Namespace) -> None:
    """REPL loop for interactive searching."""
    print("Web Search Agent  (type 'quit' or 'exit' to stop)\n")
    while True:
        try:
            query = input("Search: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if query.lower() in ("quit", "exit", "q"):
            print("Goodbye.")
            break
        if not query:
            continue
        try:
            await run_query(service, query, args)
        except WebSearchError as exc:
            print(f"\nError: {exc}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Web search agent")
    parser.add_argument("query", nargs="?", help="Single query to run")
    parser.add_argument("--interactive", "-i", action="store_true",
                        help="Start interactive REPL mode")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable DEBUG logging")
    parser.add_argument("--links", action="store_true",
                        help="Also visit result pages and include their text")
    parser.add_argument("--no-snippets", action="store_true",
                        help="Leave out search snippets")
    parser.add_argument("--no-cache", action="store_true",
                        help="Bypass the result cache")
    parser.add_argument("--ask", action="store_true",
                        help="Answer the query with the conversation model")
    parser.add_argument("--visit", nargs="+", metavar="URL",
                        help="Visit the given links directly")
    parser.add_argument("--scrape", action="store_true",
                        help="Save result pages as text files")
    parser.add_argument("--output", choices=SCRAPE_OUTPUTS, default="multi",
                        help="Scrape into one file per page or a single file")
    parser.add_argument("--max-results", type=int, default=None,
                        help="Maximum pages to scrape (default VISIT_COUNT)")
    parser.add_argument("--snippets-file", action="store_true",
                        help="Also save the search snippets when scraping")
    parser.add_argument("--out-dir", default="scraped",
                        help="Directory for scraped files")
    parser.add_argument("--clear-cache", action="store_true",
                        help="Remove all cached search results and exit")
    return parser


async def _run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    service = WebSearchService(settings)

    if args.clear_cache:
        service.clear_cache()
        print("Search cache cleared.")
        return 0
    if args.visit:
        await run_visit(service, args.visit)
        return 0
    if args.interactive:
        await interactive_mode(service, args)
        return 0
    if not args.query:
        parser.print_help()
        return 1

    try:
        if args.scrape:
            await run_scrape(service, args.query, args)
        else:
            await run_query(service, args.query, args)
    except WebSearchError as exc:
        print(f"\nError: {exc}\n")
        return 1
    return 0


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if args.verbose:
        import logging
        logging.getLogger().setLevel(logging.DEBUG)
        for name in list(logging.root.manager.loggerDict):
            if name.startswith("src.") or name == "__main__":
                logging.getLogger(name).setLevel(logging.DEBUG)

    sys.exit(asyncio.run(_run(args, parser)))


if __name__ == "__main__":
    main()

"""Search workflow orchestration."""

from typing import Optional

from rich.console import Console

from cl_launcher.core.search import ALL_NAMESPACES
from cl_launcher.core.session import Session
from cl_launcher.utils.logging import async_log_call, get_logger

from .display import SearchDisplay

logger = get_logger(__name__)


class SearchWorkflow:
    """Runs a fuzzy query over the stored commands and prints a ranked table."""

    def __init__(self, session: Session, console: Optional[Console] = None):
        self.session = session
        self.display = SearchDisplay(console)

    @async_log_call
    async def search(self, query: str, namespace: Optional[str] = None, limit: int = 20) -> bool:
        """Execute search and display results.

        Args:
            query: Free text query, matched fuzzily
            namespace: Restrict the search to a namespace
            limit: Maximum results

        Returns:
            True if search completed
        """
        if len(self.session) == 0:
            self.display.show_error("No commands stored yet")
            return False

        scope = namespace if namespace else ALL_NAMESPACES
        ranked = self.session.rank(scope, query)[:limit]

        self.display.display_results(
            commands=[command for command, _ in ranked],
            scores=[match.score for _, match in ranked],
            query=query,
            namespace=namespace,
        )

        logger.info(f"Search for '{query}' found {len(ranked)} results")
        return True


async def search_commands(
    session: Session,
    query: str,
    namespace: Optional[str] = None,
    limit: int = 20,
    console: Optional[Console] = None,
) -> bool:
    """Search commands by fuzzy query.

    Args:
        session: Open session
        query: Search text
        namespace: Namespace to search in (all when None)
        limit: Maximum results
        console: Optional console

    Returns:
        True if search completed
    """
    workflow = SearchWorkflow(session, console)
    return await workflow.search(query, namespace, limit)

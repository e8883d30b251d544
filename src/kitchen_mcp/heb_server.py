"""HEB Shopping List MCP server.

FastMCP server with product search and shopping list tools.
Run: kitchen-mcp-heb
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .config import HEBSettings, load_heb_settings
from .core import shopping
from .core.clients.heb import HEBGraphQLClient
from .core.errors import ConfigurationError
from .logging_utils import configure_logging
from .tooling import DESTRUCTIVE, READ_ONLY, WRITE, tool_errors

logger = logging.getLogger(__name__)

SERVER_NAME = "HEB Shopping List"
INSTRUCTIONS = (
    "Search H-E-B products and manage your H-E-B shopping lists. "
    "Search first and let the user pick a product before adding it to a list."
)


def create_server(settings: HEBSettings, client: HEBGraphQLClient) -> FastMCP:
    """Build the server around one long-lived GraphQL client."""
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)

    # ─── Tool 1: Search ──────────────────────────────────────────────────────

    @mcp.tool(annotations=READ_ONLY)
    async def heb_search_products(search_term: str, max_results: int = 10) -> dict:
        """ALWAYS use this tool FIRST when the user wants to add a product to their shopping list.

        Search for products at HEB by name or keyword and SHOW the results to the
        user so they can choose which specific product they want. Returns each
        product's ID, name, price, brand, size, and availability.

        Args:
            search_term: The product name or keyword to search for (e.g., 'eggs', 'milk', 'bread').
            max_results: Maximum number of results to return. Default 10.
        """
        with tool_errors("heb_search_products"):
            products = await shopping.search_products(client, settings, search_term, max_results)
        return {
            "search_term": search_term.strip(),
            "products": [p.to_payload() for p in products],
            "count": len(products),
            "summary": f"Found {len(products)} HEB product(s) matching '{search_term.strip()}'",
        }

    # ─── Tool 2: Lists ───────────────────────────────────────────────────────

    @mcp.tool(annotations=READ_ONLY)
    async def heb_get_shopping_lists() -> dict:
        """Get all your HEB shopping lists with their ID, name, and item count.

        Use this to find list IDs for adding items or viewing list contents.
        """
        with tool_errors("heb_get_shopping_lists"):
            lists = await shopping.get_shopping_lists(client)
        return {
            "lists": [sl.to_payload() for sl in lists],
            "count": len(lists),
            "summary": f"{len(lists)} shopping list(s): " + ", ".join(sl.name for sl in lists)
            if lists else "No shopping lists found",
        }

    # ─── Tool 3: List items ──────────────────────────────────────────────────

    @mcp.tool(annotations=READ_ONLY)
    async def heb_get_list_items(list_id: Optional[str] = None) -> dict:
        """Get all items in an HEB shopping list: product name, quantity, price, and checked status.

        Args:
            list_id: Shopping list ID. Optional if HEB_DEFAULT_LIST_ID is set.
        """
        with tool_errors("heb_get_list_items"):
            detail = await shopping.get_list_items(client, settings, list_id)
        checked = sum(1 for item in detail.items if item.checked)
        return {
            "list": detail.to_payload(),
            "summary": f'"{detail.name}" has {detail.item_count} item(s), {checked} checked off',
        }

    # ─── Tool 4: Add ─────────────────────────────────────────────────────────

    @mcp.tool(annotations=WRITE)
    async def heb_add_to_list(
        product_id: Optional[str] = None,
        search_term: Optional[str] = None,
        quantity: int = 1,
        list_id: Optional[str] = None,
    ) -> dict:
        """Add a specific product to an HEB shopping list.

        PREFERRED: pass product_id after showing search results to the user.
        ALTERNATIVE: pass search_term to add the top result, only when the user
        explicitly wants the first result without seeing options.

        Args:
            product_id: HEB product ID selected from heb_search_products results.
            search_term: Search term whose top result is added (e.g., 'eggs').
            quantity: Quantity to add. Default 1.
            list_id: Shopping list ID. Optional if HEB_DEFAULT_LIST_ID is set.
        """
        with tool_errors("heb_add_to_list"):
            result = await shopping.add_to_list(
                client, settings,
                product_id=product_id,
                search_term=search_term,
                quantity=quantity,
                list_id=list_id,
            )
        return result.to_payload()

    # ─── Tool 5: Remove ──────────────────────────────────────────────────────

    @mcp.tool(annotations=DESTRUCTIVE)
    async def heb_remove_from_list(
        item_ids: Optional[list[str]] = None,
        product_name: Optional[str] = None,
        list_id: Optional[str] = None,
    ) -> dict:
        """Remove item(s) from an HEB shopping list.

        Remove by item IDs (from heb_get_list_items) or by product name, which
        removes every item whose name contains it.

        Args:
            item_ids: Shopping list item IDs to remove.
            product_name: Product name to match, e.g. 'eggs' when the user says "remove eggs".
            list_id: Shopping list ID. Optional if HEB_DEFAULT_LIST_ID is set.
        """
        with tool_errors("heb_remove_from_list"):
            result = await shopping.remove_from_list(
                client, settings,
                item_ids=item_ids,
                product_name=product_name,
                list_id=list_id,
            )
        return result.to_payload()

    # ─── Tool 6: Update quantity ─────────────────────────────────────────────

    @mcp.tool(annotations=WRITE)
    async def heb_update_item_quantity(item_id: str, quantity: int, list_id: Optional[str] = None) -> dict:
        """Set the quantity of an item already on an HEB shopping list.

        Args:
            item_id: Shopping list item ID (from heb_get_list_items).
            quantity: New quantity, a positive integer.
            list_id: Shopping list ID. Optional if HEB_DEFAULT_LIST_ID is set.
        """
        with tool_errors("heb_update_item_quantity"):
            result = await shopping.update_item_quantity(client, settings, item_id, quantity, list_id)
        return result.to_payload()

    return mcp


def main():
    """Entry point for the CLI command."""
    try:
        settings = load_heb_settings()
    except ConfigurationError as exc:
        print(f"Fatal error: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level, settings.secrets)
    client = HEBGraphQLClient(settings)
    logger.info("HEB Shopping List MCP server running on stdio (store %s)", settings.store_id)
    create_server(settings, client).run()


if __name__ == "__main__":
    main()

"""AllRecipes MCP server.

FastMCP server with recipe search and recipe detail tools.
Run: kitchen-mcp-recipes
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from mcp.server.fastmcp import FastMCP

from .config import get_log_level
from .core.clients import allrecipes
from .logging_utils import configure_logging
from .tooling import READ_ONLY, tool_errors

logger = logging.getLogger(__name__)

SERVER_NAME = "AllRecipes"
INSTRUCTIONS = "Search AllRecipes.com and read full recipes: ingredients, steps, nutrition, and ratings."


def create_server(transport: Optional[httpx.AsyncBaseTransport] = None) -> FastMCP:
    """Build the server. `transport` replaces the network, for tests."""
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)

    @mcp.tool(annotations=READ_ONLY)
    async def search_recipes(query: str, limit: int = 10) -> dict:
        """Search for recipes on AllRecipes.com by keyword.

        Returns matching recipes with title, URL, rating, and review count.

        Args:
            query: Search query (e.g., 'chicken pasta', 'healthy salad').
            limit: Maximum number of results, 1 to 50. Default 10.
        """
        with tool_errors("search_recipes"):
            results = await allrecipes.search_recipes(query, limit, transport=transport)
        return {
            "query": query.strip(),
            "results": [r.to_payload() for r in results],
            "count": len(results),
            "summary": f"Found {len(results)} recipe(s) matching '{query.strip()}'",
        }

    @mcp.tool(annotations=READ_ONLY)
    async def get_recipe(recipe_url: str) -> dict:
        """Get full details of a recipe: ingredients, instructions, nutrition, ratings, and times.

        IMPORTANT: use the full URL returned by search_recipes. A bare numeric
        recipe ID also works.

        Args:
            recipe_url: Recipe URL, e.g. 'https://www.allrecipes.com/recipe/240747/mommas-healthy-meatloaf/'.
        """
        with tool_errors("get_recipe"):
            recipe = await allrecipes.get_recipe(recipe_url, transport=transport)
        return {
            "recipe": recipe.to_payload(),
            "summary": _recipe_summary(recipe),
        }

    return mcp


def _recipe_summary(recipe) -> str:
    parts = [recipe.name or f"Recipe {recipe.id}"]
    parts.append(f"{len(recipe.ingredients)} ingredients, {len(recipe.instructions)} steps")
    if recipe.total_time:
        parts.append(f"total time {recipe.total_time}")
    if recipe.rating is not None:
        parts.append(f"rated {recipe.rating:.1f}/5")
    return " | ".join(parts)


def main():
    """Entry point for the CLI command."""
    configure_logging(get_log_level())
    logger.info("AllRecipes MCP server running on stdio")
    create_server().run()


if __name__ == "__main__":
    main()

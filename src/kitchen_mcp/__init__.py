"""Kitchen MCP servers.

Model Context Protocol tools for grocery shopping and cooking: H-E-B product
search and shopping lists, and AllRecipes recipe search and details.
"""

__version__ = "0.1.0"

"""
Oracle - coding-problem solver backed by OpenAI's Responses API, served over MCP.
"""

__version__ = "0.1.0"

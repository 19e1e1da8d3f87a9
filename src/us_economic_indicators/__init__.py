"""US Economic Indicators MCP Server.

Time series of US economic indicators from Financial Modeling Prep, windowed
by period (1Y/5Y/10Y/All) with a tracking point for chart cursors.
"""

__version__ = "0.1.0"

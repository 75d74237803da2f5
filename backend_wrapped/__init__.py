"""
Crypto Wrapped backend.

Fetches a wallet's transaction history from the Etherscan explorer API and
turns the trailing calendar year into a fixed sequence of insight slides.
Packages: explorer (fetch + schema), analytics (window, engine, pipeline),
presentation (slide cursor), api_server (FastAPI), config, core, wrapped_logging.
"""

__version__ = "0.1.0"

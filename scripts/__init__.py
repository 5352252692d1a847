"""scripts package initializer so the CLI can be run with
`python -m scripts.search_videos`.
"""

from .search_videos import main

__all__ = ["main"]

"""Project settings for apicatalog.

Environment overrides:
- APICATALOG_SOURCE_URL  page the catalog is built from (provenance + link base)
- APICATALOG_DATA_FILE   dataset JSON read by the query commands
"""

from __future__ import annotations

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Source document
# ---------------------------------------------------------------------------
SOURCE_URL = os.environ.get(
    "APICATALOG_SOURCE_URL", "https://moodledev.io/docs/4.5/apis",
)

# Docusaurus renders the page body inside this container
ROOT_SELECTOR = "article .theme-doc-markdown"

# Heading levels that open a category and an API entry
CATEGORY_HEADING_LEVEL = 2
ENTRY_HEADING_LEVEL = 3

# ---------------------------------------------------------------------------
# Dataset file
# ---------------------------------------------------------------------------
DATA_FILE = Path(os.environ.get("APICATALOG_DATA_FILE", "data/apis.json"))

# ---------------------------------------------------------------------------
# Query limits
# ---------------------------------------------------------------------------
DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 25

SLUG_COMPLETION_LIMIT = 15
CATEGORY_COMPLETION_LIMIT = 10

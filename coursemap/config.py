import os

# Project root, the anchor for default file locations
basedir = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))


class Config:
    # Course catalog JSON (array of course records). Override with COURSEMAP_CATALOG.
    CATALOG_PATH = os.environ.get(
        "COURSEMAP_CATALOG", os.path.join(basedir, "catalog.json"))

    # Course shown when no master is given
    DEFAULT_MASTER_COURSE = os.environ.get("COURSEMAP_DEFAULT_COURSE", "COMP2611")

    SEARCH_LIMIT = 10

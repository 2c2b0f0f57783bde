import os
import sys
import importlib
import warnings

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../backend")))
from sqlalchemy.exc import MovedIn20Warning

import database


def test_database_module_has_no_legacy_imports():
    """Re-importing database.py must not trigger SQLAlchemy 2.0 move warnings."""
    saved = dict(vars(database))
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("error", MovedIn20Warning)
            importlib.reload(database)
    finally:
        # Keep the original engine, Base and get_db that the app is wired to
        vars(database).update(saved)

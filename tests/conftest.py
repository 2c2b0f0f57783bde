import os
import sys

# Keep the suite off the on-disk database; API tests override get_db anyway
os.environ.setdefault("DATABASE_PATH", ":memory:")
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../backend")))

import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Importing the app fails fast without an origin allow-list.
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")
os.environ.setdefault("ALLOW_CREDENTIALS", "false")
# Never report test failures to a real Sentry project.
os.environ.pop("SENTRY_DSN", None)

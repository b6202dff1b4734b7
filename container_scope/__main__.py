"""Позволяет запускать пакет через `python -m container_scope`."""

import sys

from container_scope.main import main

sys.exit(main())

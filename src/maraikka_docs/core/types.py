"""Core type definitions."""

from typing import NewType

# URL path for routing (e.g., "/guide", "/domain/page")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)

# Canonical document identifier (e.g., "", "guide", "domain/page")
ContentKey = NewType("ContentKey", str)

ROOT_KEY = ContentKey("")

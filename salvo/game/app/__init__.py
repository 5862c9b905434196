"""Turn orchestration over the game core."""

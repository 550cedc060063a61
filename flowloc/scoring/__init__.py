"""Translation quality scoring."""

"""Dataset loading, name resolution and metric building."""

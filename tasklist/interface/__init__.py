"""Display-layer ports and controllers."""

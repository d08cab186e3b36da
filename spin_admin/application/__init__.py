"""Application layer: live feeds, projections, privilege gate, and use cases."""

"""Application layer: evaluation, dispatch, assembly, reporting."""

"""State/store layer.

This package is the single source of truth for how incoming records from
the fetch layer are merged into the client-side state. Nothing outside
:class:`pygta.state.store.GtaStore` mutates the held collections.
"""

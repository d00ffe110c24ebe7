# lexrel/adapters/__init__.py
"""
Infrastructure Adapters.

This package contains the concrete implementations of the Ports defined in `lexrel.core.ports`:
- `persistence`: the binary GloVe codec and the random-access embedding store.
- `index`: the k-d tree nearest-neighbour index.
- `glove_adaptor`: the GloVe backend of the lexical-semantic API.

In Hexagonal Architecture, dependencies point INWARD. These modules depend on `lexrel.core`,
but `lexrel.core` never imports from here.
"""

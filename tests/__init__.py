# tests/__init__.py
"""
Test Suite for lexrel.

Organization:
- `core`: Domain models and the cosine scorer, no I/O.
- `adapters`: Binary codec, embedding store, k-d tree and the GloVe backend over
  small folders written to tmp_path.
- top level: Container wiring and the shared config/logging/telemetry layer.
"""

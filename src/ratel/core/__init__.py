"""Core traceability primitives: fingerprints, manifest, engine."""

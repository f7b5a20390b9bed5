"""Core building blocks: paths, config, ids, permissions and the record store."""

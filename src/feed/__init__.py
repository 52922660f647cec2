"""Public feed models, errors and the local (cache) loader."""

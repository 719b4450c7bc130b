"""Provider-side adapter: receives events, dispatches actions, posts responses."""

__version__ = "0.1.0"

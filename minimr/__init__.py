"""A tiny single-master, single-worker MapReduce over local TCP sockets."""

__version__ = "0.1.0"
__all__ = ["base", "master", "net", "submit", "tasks", "text", "wordcount", "worker"]
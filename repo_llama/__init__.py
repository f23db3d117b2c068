"""RepoLlama: ask questions about a local repository, grounded in its own code."""

__version__ = "0.1.0"

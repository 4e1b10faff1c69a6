"""DI container, modules, context-contributor pipelines, mount sorting and dotenv/environment helpers."""

__version__ = "0.1.1"
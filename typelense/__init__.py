"""typelense: monorepo workspace detection and TypeScript error reports."""

__version__ = "0.1.0"

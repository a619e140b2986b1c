"""Container image build agent: clone, build and push from environment input."""

__version__ = "0.1.0"

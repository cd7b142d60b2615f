"""Contract Autofill API - LLM-assisted real-estate contract drafting."""

__version__ = "1.0.0"

"""plan-qa: grounded question answering over uploaded PDF documents."""

__version__ = "1.0.0"

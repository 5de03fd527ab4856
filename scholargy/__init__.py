"""
Scholargy backend: student dashboard API with AI-generated next steps.
"""

__version__ = "0.1.0"

"""
LLM agents for the Scholargy backend.

Each agent package holds its prompt templates; orchestration lives in
scholargy/services.
"""

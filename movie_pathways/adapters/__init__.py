"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to:
- State storage (JSON file, in-memory)
- Itinerary planning (beam search engine)
"""

"""Headless play: a stepping environment around the engine and simple policies."""

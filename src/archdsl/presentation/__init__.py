"""Presentation layer: public DSL facade and pytest plugin."""

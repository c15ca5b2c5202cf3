"""Command line tools for inspecting and producing quota messages."""

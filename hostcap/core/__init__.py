"""Core — resolver plumbing, configuration, and use cases."""

"""Use cases — caller-side orchestration over resolved capabilities."""

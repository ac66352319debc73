"""Collaborators around plan generation: identity, persistence, device scheduling, events."""

"""User change notifications."""

"""Service layer - operations composing several repositories."""

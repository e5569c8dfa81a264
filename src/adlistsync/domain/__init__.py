"""Domain layer: adlist model, tagging, classification and reconciliation."""

"""Domain packages: one per resource type plus the shared resource template."""

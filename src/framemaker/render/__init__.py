"""Screenshot preparation, template composition and rasterization."""

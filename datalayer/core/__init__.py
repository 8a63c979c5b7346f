"""Cross-cutting infrastructure: config, logging, exceptions, wiring."""

"""Core domain: models, encoders and ports. No I/O."""

"""HTTP routers and response models."""

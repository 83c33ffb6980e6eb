"""Types and helpers shared by the provider, props and export layers."""

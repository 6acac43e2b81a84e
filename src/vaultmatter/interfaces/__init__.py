"""User-facing interfaces for vaultmatter."""
